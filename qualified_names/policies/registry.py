"""Selection of the schema policy for a connection."""

import logging

from ..connections.base import ProviderFamily
from .base import DefaultSchemaPolicy, SchemaPolicy
from .information_schema import InformationSchemaPolicy
from .sqlserver import OdbcPolicy, OleDbPolicy, SqlServerPolicy

logger = logging.getLogger(__name__)


def policy_for(connection) -> SchemaPolicy:
    """Pick the schema policy matching a connection's provider family.

    Args:
        connection: Connection exposing ``provider_family`` and ``provider_name``

    Returns:
        Policy instance; the default policy for unknown families
    """
    family = connection.provider_family
    if family == ProviderFamily.SQLSERVER:
        policy = SqlServerPolicy()
    elif family == ProviderFamily.OLEDB:
        policy = OleDbPolicy(connection.provider_name)
    elif family == ProviderFamily.ODBC:
        policy = OdbcPolicy(connection.provider_name)
    elif family in (ProviderFamily.DUCKDB, ProviderFamily.POSTGRESQL):
        policy = InformationSchemaPolicy()
    else:
        logger.debug(f"Using default schema policy for {connection!r}")
        policy = DefaultSchemaPolicy()
    return policy
