"""Schema policies for SQL Server reached natively, through OLE DB or through ODBC."""

from typing import Optional, Tuple
import logging

from .base import SchemaMetaData, SchemaPolicy

logger = logging.getLogger(__name__)

# OLE DB providers for MS SQL, matched as case-insensitive prefixes
# (e.g. "SQLOLEDB.1", "SQLNCLI11")
KNOWN_MSSQL_OLEDB_PROVIDERS = ("SQLOLEDB", "SQLNCLI")

# ODBC driver files for MS SQL, matched exactly
KNOWN_MSSQL_ODBC_DRIVERS = ("sqlsrv32.dll",)

# First release with schemas separate from users (SQL Server 2005)
SCHEMA_AWARE_MAJOR_VERSION = 9

DEFAULT_SCHEMA_SQL = (
    "select default_schema_name from sys.database_principals where name = user_name()"
)
USER_NAME_SQL = "select user_name()"

MSSQL_SYSTEM_SCHEMAS = ("sys", "INFORMATION_SCHEMA")


def is_mssql(provider_name: Optional[str]) -> bool:
    """Check whether an OLE DB provider or ODBC driver name is for MS SQL."""
    if not provider_name:
        return False
    lowered = provider_name.lower()
    for prefix in KNOWN_MSSQL_OLEDB_PROVIDERS:
        if lowered.startswith(prefix.lower()):
            return True
    for driver in KNOWN_MSSQL_ODBC_DRIVERS:
        if lowered == driver.lower():
            return True
    return False


def parse_major_version(server_version: str) -> int:
    """Major version from a ``major.minor.build`` string.

    Raises:
        ValueError: If there is no '.' or the leading part is not an integer
    """
    index = server_version.index(".")
    return int(server_version[:index])


def mssql_default_schema(connection) -> Optional[str]:
    """Default schema of the current SQL Server user.

    Servers from version 9 on are asked for the user's default schema; older
    servers use the user name as the schema. Any failure yields None.
    """
    try:
        if not connection.is_open():
            raise RuntimeError("connection is not open")
        version = parse_major_version(connection.server_version)
        if version >= SCHEMA_AWARE_MAJOR_VERSION:
            sql = DEFAULT_SCHEMA_SQL
        else:
            sql = USER_NAME_SQL
        return connection.execute_scalar(sql)
    except Exception as e:
        logger.warning(f"Could not determine default schema: {e}")
        return None


class SqlServerPolicy(SchemaPolicy):
    """Native SQL Server client."""

    def schema_metadata(self) -> Tuple[SchemaMetaData, ...]:
        return (
            SchemaMetaData(
                schema_table="Tables",
                schema_column="TABLE_SCHEMA",
                name_column="TABLE_NAME",
                table_type_column="TABLE_TYPE",
                valid_table_types=("BASE TABLE", "VIEW"),
                invalid_schemas=MSSQL_SYSTEM_SCHEMAS,
            ),
        )

    def default_schema(self, connection) -> Optional[str]:
        return mssql_default_schema(connection)


class OleDbPolicy(SchemaPolicy):
    """OLE DB providers; default schema is only known for MS SQL ones."""

    def __init__(self, provider_name: str = ""):
        self.provider_name = provider_name

    def schema_metadata(self) -> Tuple[SchemaMetaData, ...]:
        return (
            SchemaMetaData(
                schema_table="Tables",
                schema_column="TABLE_SCHEMA",
                name_column="TABLE_NAME",
                table_type_column="TABLE_TYPE",
                valid_table_types=("TABLE", "VIEW"),
                invalid_schemas=MSSQL_SYSTEM_SCHEMAS,
            ),
        )

    def default_schema(self, connection) -> Optional[str]:
        if is_mssql(self.provider_name):
            return mssql_default_schema(connection)
        return None

    def __repr__(self) -> str:
        return f"OleDbPolicy(provider={self.provider_name!r})"


class OdbcPolicy(SchemaPolicy):
    """ODBC drivers, which report tables and views in separate collections."""

    def __init__(self, driver_name: str = ""):
        self.driver_name = driver_name

    def schema_metadata(self) -> Tuple[SchemaMetaData, ...]:
        tables = SchemaMetaData(
            schema_table="Tables",
            schema_column="TABLE_SCHEM",
            name_column="TABLE_NAME",
            table_type_column="TABLE_TYPE",
            valid_table_types=("TABLE",),
            invalid_schemas=MSSQL_SYSTEM_SCHEMAS,
        )
        views = SchemaMetaData(
            schema_table="Views",
            schema_column="TABLE_SCHEM",
            name_column="TABLE_NAME",
            table_type_column="TABLE_TYPE",
            valid_table_types=("VIEW",),
            invalid_schemas=MSSQL_SYSTEM_SCHEMAS,
        )
        return (tables, views)

    def default_schema(self, connection) -> Optional[str]:
        if is_mssql(self.driver_name):
            return mssql_default_schema(connection)
        return None

    def __repr__(self) -> str:
        return f"OdbcPolicy(driver={self.driver_name!r})"
