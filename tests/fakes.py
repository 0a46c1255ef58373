"""In-memory fake metadata connection used across tests."""

from typing import Any, Dict, List, Optional, Sequence

import pyarrow as pa

from qualified_names.connections.base import MetadataConnection, ProviderFamily
from qualified_names.errors import MetadataUnavailableError


class FakeConnection(MetadataConnection):
    """Serves canned metadata rows; quoting follows a configurable bracket style."""

    def __init__(
        self,
        collections: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        prefix: str = "[",
        suffix: str = "]",
        report_quotes: bool = True,
        family: ProviderFamily = ProviderFamily.GENERIC,
        provider: str = "",
        server_version: str = "",
        scalars: Optional[Dict[str, Optional[str]]] = None,
        column_error: Optional[Exception] = None,
    ):
        super().__init__("fake", {"provider": provider})
        self.collections = collections or {}
        self.prefix = prefix
        self.suffix = suffix
        self.report_quotes = report_quotes
        self.provider_family = family
        self._server_version = server_version
        self.scalars = scalars or {}
        self.column_error = column_error
        self.metadata_calls: List[tuple] = []
        self.scalar_calls: List[str] = []
        self._connected = True

    def connect(self) -> None:
        self._connected = True

    def disconnect(self) -> None:
        self._connected = False

    @property
    def server_version(self) -> str:
        return self._server_version

    @property
    def reported_quote_prefix(self) -> str:
        return self.prefix if self.report_quotes else ""

    @property
    def reported_quote_suffix(self) -> str:
        return self.suffix if self.report_quotes else ""

    def get_metadata(
        self, collection: str, restrictions: Optional[Sequence[Optional[str]]] = None
    ) -> pa.Table:
        self.metadata_calls.append((collection, restrictions))
        if collection == "Columns" and self.column_error is not None:
            raise self.column_error
        if collection not in self.collections:
            raise MetadataUnavailableError(collection, "not supported by fake")
        rows = self.collections[collection]
        if collection == "Columns" and restrictions is not None:
            rows = [
                row
                for row in rows
                if row.get("TABLE_SCHEMA") == restrictions[1]
                and row.get("TABLE_NAME") == restrictions[2]
            ]
        return pa.Table.from_pylist(rows)

    def execute_scalar(self, sql: str) -> Optional[str]:
        self.scalar_calls.append(sql)
        if sql not in self.scalars:
            raise RuntimeError(f"unexpected query: {sql}")
        return self.scalars[sql]

    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace(self.suffix, self.suffix + self.suffix)
        return f"{self.prefix}{escaped}{self.suffix}"
