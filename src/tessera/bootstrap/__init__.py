"""Bootstrap the application."""

from .bootstrap import bootstrap

__all__ = ["bootstrap"]
