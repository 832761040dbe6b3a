"""TESSERA

A small library of in-memory services that report every outcome through a
generic result envelope, with simulated datastore latency standing in for I/O.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
