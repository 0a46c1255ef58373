"""Discovery of tables, views and columns across backends."""

from typing import Any, Dict, Iterable, List, Optional, Tuple
import pyarrow as pa

from ..errors import RestrictionNotSupportedError
from ..identifiers import IdentifierCodec
from ..policies import SchemaMetaData, SchemaPolicy, policy_for
from ..utils.logging import get_contextual_logger

COLUMNS_COLLECTION = "Columns"
COLUMN_NAME_FIELD = "COLUMN_NAME"


class CatalogEnumerator:
    """Lists display-ready table names and column names for one connection.

    Failures never propagate: table listing returns whatever was gathered,
    column listing returns None when the columns cannot be determined.
    """

    def __init__(
        self,
        connection,
        policy: Optional[SchemaPolicy] = None,
        codec: Optional[IdentifierCodec] = None,
    ):
        """Initialize enumerator.

        Args:
            connection: Open metadata connection, owned by the caller
            policy: Schema policy; chosen from the connection's provider family
                when omitted
            codec: Identifier codec; bound to the connection when omitted
        """
        self.connection = connection
        self.policy = policy if policy is not None else policy_for(connection)
        self.codec = codec if codec is not None else IdentifierCodec(connection)
        self.logger = get_contextual_logger(__name__, {"connection": connection.name})

    def prepare_name_for_sql(self, name: str) -> str:
        """Fully quote a possibly qualified name for use in a query."""
        return self.codec.prepare_for_query(name)

    def split_name(self, name: str) -> Optional[List[str]]:
        """Split a qualified name into unquoted parts, None if malformed."""
        return self.codec.split(name)

    def join_and_quote_name(self, parts: List[str], fully_quote: bool) -> str:
        """Join unquoted parts, quoting minimally or fully."""
        return self.codec.join(parts, fully_quote)

    def format_table_name_for_display(self, schema: Optional[str], table: str) -> str:
        """Minimally quoted ``schema.table``, or just ``table`` without schema."""
        if not schema:
            return self.codec.join([table], force_quote=False)
        return self.codec.join([schema, table], force_quote=False)

    def list_tables_and_views(self) -> List[str]:
        """List tables and views, sorted by upper-cased name.

        Objects in the default schema are listed by bare name. A name reported
        by more than one metadata source is listed once per source.

        Returns:
            Display names; on any error, the names gathered so far
        """
        self.logger.debug("Listing tables and views")
        table_names: List[str] = []
        try:
            default_schema = self.policy.default_schema(self.connection)
            self.logger.debug(f"Default schema is {default_schema}")

            for metadata in self.policy.schema_metadata():
                rows = self._fetch_rows(metadata)
                if rows is None:
                    continue
                for row in rows:
                    display_name = self._display_name(row, metadata, default_schema)
                    if display_name is not None:
                        self.logger.debug(f"Adding table {display_name}")
                        table_names.append(display_name)
                table_names.sort(key=str.upper)
        except Exception as e:
            self.logger.warning(
                f"Failed to fetch tables for {self.connection.name}: {e}", exc_info=True
            )

        return table_names

    def _fetch_rows(self, metadata: SchemaMetaData) -> Optional[List[Dict[str, Any]]]:
        """Rows of a metadata source, None when the backend does not expose it."""
        try:
            self.logger.debug(f"Getting schema table {metadata.schema_table}")
            table = self.connection.get_metadata(metadata.schema_table)
        except Exception as e:
            # Normal for providers without e.g. a Views collection
            self.logger.warning(
                f"Skipping metadata collection {metadata.schema_table}: {e}"
            )
            return None
        return table.to_pylist()

    def _display_name(
        self,
        row: Dict[str, Any],
        metadata: SchemaMetaData,
        default_schema: Optional[str],
    ) -> Optional[str]:
        """Display name of a metadata row, None if the row is filtered out."""
        if metadata.table_type_column is not None:
            table_type = row[metadata.table_type_column]
            if not metadata.accepts_table_type(table_type):
                self.logger.debug(f"Table type {table_type} is not acceptable")
                return None

        table_schema = None
        is_default_schema = False
        if metadata.schema_column is not None:
            table_schema = row[metadata.schema_column]
            if table_schema is not None:
                if metadata.is_invalid_schema(table_schema):
                    self.logger.debug(f"Schema {table_schema} is not acceptable")
                    return None
                is_default_schema = (
                    default_schema is not None
                    and table_schema.lower() == default_schema.lower()
                )

        table_name = row[metadata.name_column]
        if not table_name:
            self.logger.debug(f"Row without a table name in {metadata.schema_table}")
            return None

        if is_default_schema:
            return self.format_table_name_for_display(None, table_name)
        return self.format_table_name_for_display(table_schema, table_name)

    def split_table_name(self, name: str) -> Optional[Tuple[Optional[str], str]]:
        """Split a table name into (schema, table).

        The catalog part of a three-part name is ignored. The default schema is
        used when the name has no schema.

        Returns:
            Tuple of (schema, table), or None if the name cannot be split
        """
        parts = self.codec.split(name)
        if not parts:
            return None
        if len(parts) > 1:
            schema = parts[-2]
        else:
            schema = self.policy.default_schema(self.connection)
        return schema, parts[-1]

    def list_columns(self, table_name: str) -> Optional[List[str]]:
        """List column names of a table in backend order.

        Args:
            table_name: Possibly qualified, possibly quoted table name

        Returns:
            Column names, or None when they cannot be determined and callers
            should select all columns
        """
        self.logger.debug(f"Getting columns for {table_name}")
        try:
            split = self.split_table_name(table_name)
            if split is None:
                self.logger.debug(f"Cannot split table name {table_name!r}")
                return None
            target_schema, target_name = split

            restrictions = [None, target_schema, target_name, None]
            columns: Optional[pa.Table] = None
            try:
                columns = self.connection.get_metadata(COLUMNS_COLLECTION, restrictions)
            except RestrictionNotSupportedError as e:
                self.logger.debug(
                    f"Column metadata for {table_name} is not available: {e}"
                )

            if columns is None:
                self.logger.debug("Column metadata is null")
                return None

            result: List[str] = []
            for row in columns.to_pylist():
                result.append(str(row[COLUMN_NAME_FIELD]))
            return result
        except Exception as e:
            self.logger.warning(f"Getting columns for {table_name} failed: {e}")
        return None

    def build_select_sql(
        self, table_name: str, columns: Optional[Iterable[str]] = None
    ) -> str:
        """Build ``select <columns> from <table>`` for a table.

        Column names are quoted individually; no columns means ``*``. The table
        name is quoted with ``prepare_name_for_sql``.
        """
        quoted_columns: List[str] = []
        if columns is not None:
            for column in columns:
                quoted_columns.append(self.codec.quote_identifier(column))

        column_sql = ",".join(quoted_columns) if quoted_columns else "*"
        return f"select {column_sql} from {self.prepare_name_for_sql(table_name)}"

    def __repr__(self) -> str:
        return f"CatalogEnumerator(connection={self.connection!r}, policy={self.policy!r})"
