"""DuckDB metadata connection."""

from typing import Any, Dict, Optional, Sequence
import pyarrow as pa
import duckdb
import logging
from sqlglot import exp

from .base import MetadataConnection, ProviderFamily
from .information_schema import build_metadata_query

logger = logging.getLogger(__name__)


class DuckDBConnection(MetadataConnection):
    """DuckDB connection serving metadata from information_schema."""

    provider_family = ProviderFamily.DUCKDB

    def __init__(self, name: str, config: Dict[str, Any]):
        """Initialize DuckDB connection.

        Config should include:
            - path: Path to DuckDB database file (or :memory: for in-memory)
            - read_only: Whether to open in read-only mode (default: True)
        """
        super().__init__(name, config)
        self.db_path = config.get("path", ":memory:")
        self.read_only = config.get("read_only", True)

    def connect(self) -> None:
        """Establish connection to DuckDB."""
        logger.info(f"Connecting to DuckDB at '{self.db_path}'")
        try:
            self.connection = duckdb.connect(self.db_path, read_only=self.read_only)
        except duckdb.Error as e:
            logger.error(f"Failed to connect to DuckDB {self.name}: {e}")
            raise ConnectionError(f"DuckDB connection failed: {e}") from e
        self._connected = True
        logger.info(f"Successfully connected to DuckDB: {self.name}")

    def disconnect(self) -> None:
        """Close DuckDB connection."""
        if self.connection:
            self.connection.close()
            logger.info(f"Disconnected from DuckDB: {self.name}")
            self.connection = None
            self._connected = False

    @property
    def server_version(self) -> str:
        return duckdb.__version__

    def get_metadata(
        self, collection: str, restrictions: Optional[Sequence[Optional[str]]] = None
    ) -> pa.Table:
        """Fetch a metadata collection as an Arrow table."""
        filters = self._restriction_filters(collection, restrictions)
        sql, params = build_metadata_query(collection, filters, "?")
        logger.debug(f"Fetching {collection} on {self.name} with {params}")
        return self.connection.execute(sql, params).fetch_arrow_table()

    def execute_scalar(self, sql: str) -> Optional[str]:
        row = self.connection.execute(sql).fetchone()
        if row is None or row[0] is None:
            return None
        return str(row[0])

    def quote_identifier(self, identifier: str) -> str:
        return exp.to_identifier(identifier, quoted=True).sql(dialect="duckdb")
