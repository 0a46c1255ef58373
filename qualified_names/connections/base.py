"""Base metadata connection interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
from enum import Enum
import pyarrow as pa

from ..errors import MetadataUnavailableError, RestrictionNotSupportedError

# Restriction positions understood by the standard collections
RESTRICTION_SLOTS = {
    "Tables": ("TABLE_CATALOG", "TABLE_SCHEMA", "TABLE_NAME", "TABLE_TYPE"),
    "Views": ("TABLE_CATALOG", "TABLE_SCHEMA", "TABLE_NAME"),
    "Columns": ("TABLE_CATALOG", "TABLE_SCHEMA", "TABLE_NAME", "COLUMN_NAME"),
}


class ProviderFamily(Enum):
    """Backend families with distinct metadata conventions."""

    GENERIC = "generic"
    SQLSERVER = "sqlserver"
    OLEDB = "oledb"
    ODBC = "odbc"
    DUCKDB = "duckdb"
    POSTGRESQL = "postgresql"


class MetadataConnection(ABC):
    """Abstract live connection exposing catalog metadata.

    The connection is owned by the caller. Consumers only read metadata
    collections, run scalar lookups and use the backend's quoting routine.
    """

    provider_family = ProviderFamily.GENERIC

    def __init__(self, name: str, config: Dict[str, Any]):
        """Initialize connection.

        Args:
            name: Unique name for this connection
            config: Configuration dictionary
        """
        self.name = name
        self.config = config
        self.connection = None
        self._connected = False

    @abstractmethod
    def connect(self) -> None:
        """Open the underlying connection."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the underlying connection."""
        pass

    @abstractmethod
    def get_metadata(
        self, collection: str, restrictions: Optional[Sequence[Optional[str]]] = None
    ) -> pa.Table:
        """Fetch rows of a metadata collection.

        Args:
            collection: Collection name such as ``Tables``, ``Views`` or ``Columns``
            restrictions: Positional filter values; None entries mean "don't care"

        Returns:
            Arrow table with one row per object, column names upper-case

        Raises:
            MetadataUnavailableError: If the collection is not exposed
            RestrictionNotSupportedError: If the restrictions cannot be applied
        """
        pass

    @abstractmethod
    def execute_scalar(self, sql: str) -> Optional[str]:
        """Run a query and return the first column of the first row as text."""
        pass

    @abstractmethod
    def quote_identifier(self, identifier: str) -> str:
        """Quote one identifier with the backend's native rules."""
        pass

    @property
    def server_version(self) -> str:
        """Server version string, e.g. ``"15.0.2000"``."""
        return ""

    @property
    def provider_name(self) -> str:
        """OLE DB provider or ODBC driver name, empty when not applicable."""
        return self.config.get("provider", "")

    @property
    def reported_quote_prefix(self) -> str:
        return self.config.get("quote_prefix", "")

    @property
    def reported_quote_suffix(self) -> str:
        return self.config.get("quote_suffix", "")

    @property
    def reported_catalog_separator(self) -> str:
        return self.config.get("catalog_separator", "")

    @property
    def reported_schema_separator(self) -> str:
        return self.config.get("schema_separator", "")

    def is_open(self) -> bool:
        """Check if the connection is open.

        Returns:
            True if connected, False otherwise
        """
        return self._connected

    def ensure_connected(self) -> None:
        """Ensure the connection is open.

        Raises:
            ConnectionError: If connection cannot be established
        """
        if not self.is_open():
            self.connect()
            self._connected = True

    def _restriction_filters(
        self, collection: str, restrictions: Optional[Sequence[Optional[str]]]
    ) -> List[tuple]:
        """Pair restriction values with the columns they filter.

        Returns:
            List of (column, value) for every non-None restriction
        """
        slots = RESTRICTION_SLOTS.get(collection)
        if slots is None:
            raise MetadataUnavailableError(collection, "unknown collection")
        if restrictions is None:
            return []
        if len(restrictions) > len(slots):
            raise RestrictionNotSupportedError(
                collection,
                f"{len(restrictions)} restrictions given, at most {len(slots)} supported",
            )

        filters = []
        for index, value in enumerate(restrictions):
            if value is not None:
                filters.append((slots[index], value))
        return filters

    def __enter__(self):
        """Context manager entry."""
        self.ensure_connected()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()
        self._connected = False
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name})"
