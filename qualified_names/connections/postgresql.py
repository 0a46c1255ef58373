"""PostgreSQL metadata connection."""

from typing import Any, Dict, Optional, Sequence
import pyarrow as pa
import psycopg2
from psycopg2.extensions import quote_ident
from psycopg2.extras import RealDictCursor
import logging

from .base import MetadataConnection, ProviderFamily
from .information_schema import build_metadata_query

logger = logging.getLogger(__name__)


class PostgreSQLConnection(MetadataConnection):
    """PostgreSQL connection serving metadata from information_schema."""

    provider_family = ProviderFamily.POSTGRESQL

    def __init__(self, name: str, config: Dict[str, Any]):
        """Initialize PostgreSQL connection.

        Config should include:
            - host: Database host
            - port: Database port (default: 5432)
            - database: Database name
            - user: Username
            - password: Password
        """
        super().__init__(name, config)

    def connect(self) -> None:
        """Open a connection to PostgreSQL."""
        try:
            logger.info(
                f"Connecting to PostgreSQL database '{self.config['database']}' at {self.config['host']}"
            )
            self.connection = psycopg2.connect(
                host=self.config["host"],
                port=self.config.get("port", 5432),
                database=self.config["database"],
                user=self.config["user"],
                password=self.config["password"],
            )
            # Metadata reads only; a failed query must not abort later ones
            self.connection.autocommit = True
            self._connected = True
            logger.info(f"Successfully connected to PostgreSQL: {self.name}")
        except psycopg2.Error as e:
            logger.error(f"Failed to connect to PostgreSQL {self.name}: {e}")
            raise ConnectionError(f"PostgreSQL connection failed: {e}") from e

    def disconnect(self) -> None:
        """Close the connection."""
        if self.connection:
            self.connection.close()
            logger.info(f"Disconnected from PostgreSQL: {self.name}")
            self.connection = None
            self._connected = False

    def is_open(self) -> bool:
        return self._connected and self.connection is not None and not self.connection.closed

    @property
    def server_version(self) -> str:
        """Server version as ``major.minor.patch``."""
        if self.connection is None:
            return ""
        version = self.connection.server_version
        return f"{version // 10000}.{(version // 100) % 100}.{version % 100}"

    def get_metadata(
        self, collection: str, restrictions: Optional[Sequence[Optional[str]]] = None
    ) -> pa.Table:
        """Fetch a metadata collection as an Arrow table."""
        filters = self._restriction_filters(collection, restrictions)
        sql, params = build_metadata_query(collection, filters, "%s")
        try:
            with self.connection.cursor(cursor_factory=RealDictCursor) as cursor:
                logger.debug(f"Fetching {collection} on {self.name} with {params}")
                cursor.execute(sql, params)
                rows = []
                for row in cursor.fetchall():
                    rows.append(dict(row))
                return pa.Table.from_pylist(rows)
        except psycopg2.Error as e:
            logger.error(f"Error fetching {collection} metadata on {self.name}: {e}")
            self._rollback()
            raise

    def execute_scalar(self, sql: str) -> Optional[str]:
        try:
            with self.connection.cursor() as cursor:
                cursor.execute(sql)
                row = cursor.fetchone()
        except psycopg2.Error as e:
            logger.error(f"Error executing scalar query on {self.name}: {e}")
            self._rollback()
            raise
        if row is None or row[0] is None:
            return None
        return str(row[0])

    def quote_identifier(self, identifier: str) -> str:
        return quote_ident(identifier, self.connection)

    def _rollback(self) -> None:
        """Reset a transaction left aborted by a failed statement."""
        if self.connection is not None and not self.connection.autocommit:
            self.connection.rollback()
