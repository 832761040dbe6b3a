"""Adapters implementing TESSERA's outbound ports."""
