"""Adapters behind the core interfaces."""

from billventory.infrastructure import storage

__all__ = ["storage"]
