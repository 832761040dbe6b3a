"""Domain layer for TESSERA.

Contains the result envelope, the entities the services manage and small
helpers they share. This package is deliberately technology-agnostic.

Dependency rule: do not import from `tessera.adapters` or `tessera.service_layer`.
"""
