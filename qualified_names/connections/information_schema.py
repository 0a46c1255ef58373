"""SQL for serving metadata collections from ``information_schema``."""

from typing import List, Tuple

from ..errors import MetadataUnavailableError

_COLLECTION_QUERIES = {
    "Tables": """
        SELECT
            table_catalog AS "TABLE_CATALOG",
            table_schema AS "TABLE_SCHEMA",
            table_name AS "TABLE_NAME",
            table_type AS "TABLE_TYPE"
        FROM information_schema.tables
    """,
    "Views": """
        SELECT
            table_catalog AS "TABLE_CATALOG",
            table_schema AS "TABLE_SCHEMA",
            table_name AS "TABLE_NAME",
            table_type AS "TABLE_TYPE"
        FROM information_schema.tables
        WHERE table_type = 'VIEW'
    """,
    "Columns": """
        SELECT
            table_catalog AS "TABLE_CATALOG",
            table_schema AS "TABLE_SCHEMA",
            table_name AS "TABLE_NAME",
            column_name AS "COLUMN_NAME",
            ordinal_position AS "ORDINAL_POSITION",
            data_type AS "DATA_TYPE",
            is_nullable AS "IS_NULLABLE"
        FROM information_schema.columns
    """,
}

_COLLECTION_ORDER = {
    "Tables": "table_schema, table_name",
    "Views": "table_schema, table_name",
    "Columns": "table_schema, table_name, ordinal_position",
}


def build_metadata_query(
    collection: str, filters: List[tuple], placeholder: str
) -> Tuple[str, List[str]]:
    """Build a parameterized query for a metadata collection.

    Args:
        collection: Collection name
        filters: (upper-case column, value) pairs
        placeholder: Parameter marker of the driver (``?`` or ``%s``)

    Returns:
        Tuple of (sql, params)
    """
    base = _COLLECTION_QUERIES.get(collection)
    if base is None:
        raise MetadataUnavailableError(collection, "unknown collection")

    conditions = []
    params = []
    for column, value in filters:
        conditions.append(f"{column.lower()} = {placeholder}")
        params.append(value)

    sql = base.rstrip()
    if conditions:
        joiner = " AND " if "WHERE" in base else " WHERE "
        sql = sql + joiner + " AND ".join(conditions)
    sql = f"{sql} ORDER BY {_COLLECTION_ORDER[collection]}"
    return sql, params
