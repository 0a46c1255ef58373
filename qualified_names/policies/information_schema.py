"""Schema policy for backends with a standard information_schema."""

from typing import Optional, Tuple
import logging

from .base import SchemaMetaData, SchemaPolicy

logger = logging.getLogger(__name__)


class InformationSchemaPolicy(SchemaPolicy):
    """DuckDB and PostgreSQL: tables and views in one collection."""

    def schema_metadata(self) -> Tuple[SchemaMetaData, ...]:
        return (
            SchemaMetaData(
                schema_table="Tables",
                schema_column="TABLE_SCHEMA",
                name_column="TABLE_NAME",
                table_type_column="TABLE_TYPE",
                valid_table_types=("BASE TABLE", "VIEW", "LOCAL TEMPORARY"),
                invalid_schemas=("information_schema", "pg_catalog"),
            ),
        )

    def default_schema(self, connection) -> Optional[str]:
        try:
            return connection.execute_scalar("SELECT current_schema()")
        except Exception as e:
            logger.warning(f"Could not determine default schema: {e}")
            return None
