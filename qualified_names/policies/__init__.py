"""Provider-specific schema metadata policies."""

from .base import DefaultSchemaPolicy, SchemaMetaData, SchemaPolicy
from .information_schema import InformationSchemaPolicy
from .registry import policy_for
from .sqlserver import (
    OdbcPolicy,
    OleDbPolicy,
    SqlServerPolicy,
    is_mssql,
    mssql_default_schema,
)

__all__ = [
    "DefaultSchemaPolicy",
    "InformationSchemaPolicy",
    "OdbcPolicy",
    "OleDbPolicy",
    "SchemaMetaData",
    "SchemaPolicy",
    "SqlServerPolicy",
    "is_mssql",
    "mssql_default_schema",
    "policy_for",
]
