"""Table and column discovery."""

from .enumerator import CatalogEnumerator

__all__ = ["CatalogEnumerator"]
