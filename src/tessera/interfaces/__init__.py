"""Outbound ports the service layer depends on."""
