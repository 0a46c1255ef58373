"""Qualified database name parsing, quoting and table/column discovery."""

__version__ = "0.1.0"

from .catalog import CatalogEnumerator
from .errors import (
    ConfigError,
    MetadataUnavailableError,
    QuoteStyleError,
    RestrictionNotSupportedError,
)
from .identifiers import IdentifierCodec, QuoteStyle
from .policies import SchemaMetaData, SchemaPolicy, policy_for

__all__ = [
    "CatalogEnumerator",
    "ConfigError",
    "IdentifierCodec",
    "MetadataUnavailableError",
    "QuoteStyle",
    "QuoteStyleError",
    "RestrictionNotSupportedError",
    "SchemaMetaData",
    "SchemaPolicy",
    "policy_for",
]
