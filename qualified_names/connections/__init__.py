"""Metadata connections."""

from typing import Any, Dict

from .base import MetadataConnection, ProviderFamily
from .duckdb import DuckDBConnection
from .postgresql import PostgreSQLConnection

_CONNECTION_TYPES = {
    "duckdb": DuckDBConnection,
    "postgresql": PostgreSQLConnection,
}


def create_connection(name: str, connection_type: str, config: Dict[str, Any]) -> MetadataConnection:
    """Instantiate a connection adapter by type name.

    Raises:
        ValueError: If the type is not supported
    """
    connection_class = _CONNECTION_TYPES.get(connection_type)
    if connection_class is None:
        raise ValueError(f"Unsupported connection type: {connection_type}")
    return connection_class(name, config)


__all__ = [
    "MetadataConnection",
    "ProviderFamily",
    "DuckDBConnection",
    "PostgreSQLConnection",
    "create_connection",
]
