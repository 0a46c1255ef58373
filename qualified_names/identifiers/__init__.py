"""Qualified identifier parsing and quoting."""

from .codec import IdentifierCodec
from .quote_style import QuoteStyle, probe_quote_literals, resolve_quote_style

__all__ = [
    "IdentifierCodec",
    "QuoteStyle",
    "probe_quote_literals",
    "resolve_quote_style",
]
