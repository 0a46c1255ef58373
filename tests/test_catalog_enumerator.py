"""Tests for table and column discovery."""

import pytest

from qualified_names.catalog import CatalogEnumerator
from qualified_names.connections.base import ProviderFamily
from qualified_names.errors import RestrictionNotSupportedError
from qualified_names.policies import DefaultSchemaPolicy, SchemaMetaData, SchemaPolicy
from qualified_names.policies.sqlserver import DEFAULT_SCHEMA_SQL
from tests.fakes import FakeConnection


class StaticPolicy(SchemaPolicy):
    """Policy with fixed metadata sources and default schema."""

    def __init__(self, metadata, default_schema=None):
        self.metadata = tuple(metadata)
        self.default = default_schema

    def schema_metadata(self):
        return self.metadata

    def default_schema(self, connection):
        return self.default


TYPED_TABLES = SchemaMetaData(
    schema_table="Tables",
    schema_column="TABLE_SCHEMA",
    name_column="TABLE_NAME",
    table_type_column="TABLE_TYPE",
    valid_table_types=("TABLE",),
    invalid_schemas=("sys",),
)


def _row(schema, name, table_type="TABLE"):
    return {"TABLE_SCHEMA": schema, "TABLE_NAME": name, "TABLE_TYPE": table_type}


def test_default_policy_lists_bare_names():
    """The default policy only reads table names."""
    connection = FakeConnection(
        collections={"Tables": [{"TABLE_NAME": "b"}, {"TABLE_NAME": "A"}, {"TABLE_NAME": "c"}]}
    )
    enumerator = CatalogEnumerator(connection, policy=DefaultSchemaPolicy())

    assert enumerator.list_tables_and_views() == ["A", "b", "c"]


def test_type_filter_rejects_unknown_types_but_keeps_null_types():
    """Rows with a disallowed type are dropped; rows without a type are kept."""
    connection = FakeConnection(
        collections={
            "Tables": [
                _row("dbo", "orders", "TABLE"),
                _row("dbo", "sysdiagrams", "SYSTEM TABLE"),
                _row("dbo", "mystery", None),
            ]
        }
    )
    enumerator = CatalogEnumerator(connection, policy=StaticPolicy([TYPED_TABLES]))

    assert enumerator.list_tables_and_views() == ["dbo.mystery", "dbo.orders"]


def test_invalid_schema_is_excluded_regardless_of_type():
    """Objects in excluded schemas never show up."""
    connection = FakeConnection(
        collections={
            "Tables": [
                _row("sys", "objects", "TABLE"),
                _row("SYS", "columns", None),
                _row("dbo", "orders", "TABLE"),
            ]
        }
    )
    enumerator = CatalogEnumerator(connection, policy=StaticPolicy([TYPED_TABLES]))

    assert enumerator.list_tables_and_views() == ["dbo.orders"]


def test_default_schema_objects_use_bare_names():
    """Objects in the default schema are listed without their schema."""
    connection = FakeConnection(
        collections={
            "Tables": [
                _row("DBO", "orders"),
                _row("sales", "invoices"),
                _row(None, "loose"),
            ]
        }
    )
    enumerator = CatalogEnumerator(
        connection, policy=StaticPolicy([TYPED_TABLES], default_schema="dbo")
    )

    assert enumerator.list_tables_and_views() == ["loose", "orders", "sales.invoices"]


def test_display_names_are_minimally_quoted():
    """Names containing a separator are quoted so they split back correctly."""
    connection = FakeConnection(
        collections={"Tables": [_row("my.schema", "t"), _row("dbo", "a.b")]}
    )
    enumerator = CatalogEnumerator(
        connection, policy=StaticPolicy([TYPED_TABLES], default_schema="dbo")
    )

    names = enumerator.list_tables_and_views()

    assert names == ["[a.b]", "[my.schema].t"]
    assert enumerator.split_name(names[1]) == ["my.schema", "t"]


def test_results_sorted_case_insensitively_without_dedup():
    """Multiple sources are unioned and sorted; duplicates are kept."""
    views = SchemaMetaData(
        schema_table="Views",
        schema_column="TABLE_SCHEMA",
        name_column="TABLE_NAME",
    )
    connection = FakeConnection(
        collections={
            "Tables": [_row("dbo", "Zeta"), _row("dbo", "alpha")],
            "Views": [{"TABLE_SCHEMA": "dbo", "TABLE_NAME": "alpha"}, {"TABLE_SCHEMA": "dbo", "TABLE_NAME": "Beta"}],
        }
    )
    enumerator = CatalogEnumerator(
        connection, policy=StaticPolicy([TYPED_TABLES, views], default_schema="dbo")
    )

    assert enumerator.list_tables_and_views() == ["alpha", "alpha", "Beta", "Zeta"]


def test_sort_compares_upper_cased_names():
    """Underscore sorts after letters once names are upper-cased."""
    connection = FakeConnection(
        collections={"Tables": [{"TABLE_NAME": "order_items"}, {"TABLE_NAME": "orders"}]}
    )
    enumerator = CatalogEnumerator(connection, policy=DefaultSchemaPolicy())

    assert enumerator.list_tables_and_views() == ["orders", "order_items"]


def test_unavailable_collection_is_skipped():
    """A source the backend does not expose is skipped, others still count."""
    views = SchemaMetaData(schema_table="Views", name_column="TABLE_NAME")
    connection = FakeConnection(collections={"Tables": [_row("dbo", "orders")]})
    enumerator = CatalogEnumerator(connection, policy=StaticPolicy([views, TYPED_TABLES]))

    assert enumerator.list_tables_and_views() == ["dbo.orders"]


def test_unexpected_failure_returns_partial_results():
    """Names gathered before a failure are still returned."""
    broken = SchemaMetaData(
        schema_table="Broken", schema_column="TABLE_SCHEMA", name_column="NO_SUCH_COLUMN"
    )
    connection = FakeConnection(
        collections={
            "Tables": [_row("dbo", "orders")],
            "Broken": [_row("dbo", "other")],
        }
    )
    enumerator = CatalogEnumerator(connection, policy=StaticPolicy([TYPED_TABLES, broken]))

    assert enumerator.list_tables_and_views() == ["dbo.orders"]


def test_empty_when_everything_fails():
    """Failure of the only source yields an empty list, not an error."""
    connection = FakeConnection()
    enumerator = CatalogEnumerator(connection, policy=DefaultSchemaPolicy())

    assert enumerator.list_tables_and_views() == []


def test_sqlserver_family_end_to_end():
    """Policy selection, default schema lookup and filtering work together."""
    connection = FakeConnection(
        family=ProviderFamily.SQLSERVER,
        server_version="15.00.2000",
        scalars={DEFAULT_SCHEMA_SQL: "dbo"},
        collections={
            "Tables": [
                _row("dbo", "Customers", "BASE TABLE"),
                _row("dbo", "Active Customers", "VIEW"),
                _row("INFORMATION_SCHEMA", "TABLES", "VIEW"),
                _row("hr", "staff", "BASE TABLE"),
            ]
        },
    )
    enumerator = CatalogEnumerator(connection)

    assert enumerator.list_tables_and_views() == [
        "Active Customers",
        "Customers",
        "hr.staff",
    ]


def _column_rows():
    return [
        {"TABLE_SCHEMA": "dbo", "TABLE_NAME": "orders", "COLUMN_NAME": "id"},
        {"TABLE_SCHEMA": "dbo", "TABLE_NAME": "orders", "COLUMN_NAME": "customer_id"},
        {"TABLE_SCHEMA": "dbo", "TABLE_NAME": "orders", "COLUMN_NAME": "amount"},
        {"TABLE_SCHEMA": "hr", "TABLE_NAME": "orders", "COLUMN_NAME": "other"},
    ]


def test_list_columns_keeps_backend_order():
    """Columns come back in the order the backend reports them."""
    connection = FakeConnection(collections={"Columns": _column_rows()})
    enumerator = CatalogEnumerator(connection, policy=StaticPolicy([], default_schema="dbo"))

    assert enumerator.list_columns("orders") == ["id", "customer_id", "amount"]
    assert connection.metadata_calls[-1] == ("Columns", [None, "dbo", "orders", None])


def test_list_columns_uses_last_two_parts():
    """Schema and name are read from the end; the catalog is ignored."""
    connection = FakeConnection(collections={"Columns": _column_rows()})
    enumerator = CatalogEnumerator(connection, policy=StaticPolicy([], default_schema="dbo"))

    assert enumerator.list_columns("[sales].[hr].[orders]") == ["other"]
    assert connection.metadata_calls[-1] == ("Columns", [None, "hr", "orders", None])


def test_list_columns_unknown_table_is_empty_list():
    """A table without column rows yields an empty list."""
    connection = FakeConnection(collections={"Columns": _column_rows()})
    enumerator = CatalogEnumerator(connection, policy=StaticPolicy([], default_schema="dbo"))

    assert enumerator.list_columns("missing") == []


def test_list_columns_unsupported_restriction_returns_none():
    """An unsupported restriction shape means columns are unknown."""
    connection = FakeConnection(
        column_error=RestrictionNotSupportedError("Columns", "no restrictions")
    )
    enumerator = CatalogEnumerator(connection, policy=DefaultSchemaPolicy())

    assert enumerator.list_columns("orders") is None


def test_list_columns_other_failures_return_none():
    """Any other error also means columns are unknown."""
    connection = FakeConnection(column_error=RuntimeError("connection lost"))
    enumerator = CatalogEnumerator(connection, policy=DefaultSchemaPolicy())

    assert enumerator.list_columns("orders") is None


def test_list_columns_malformed_name_returns_none():
    """A name that cannot be split yields None."""
    connection = FakeConnection(collections={"Columns": _column_rows()})
    enumerator = CatalogEnumerator(connection, policy=DefaultSchemaPolicy())

    assert enumerator.list_columns("a.b.c.d") is None
    assert connection.metadata_calls == []


def test_facade_operations(double_quote_connection):
    """Name helpers delegate to the codec."""
    enumerator = CatalogEnumerator(double_quote_connection, policy=DefaultSchemaPolicy())

    assert enumerator.split_name('"MySchema"."MyTable"') == ["MySchema", "MyTable"]
    assert enumerator.prepare_name_for_sql("MyTable") == '"MyTable"'
    assert enumerator.join_and_quote_name(["s", "t"], False) == "s.t"
    assert enumerator.join_and_quote_name(["s", "t"], True) == '"s"."t"'
    assert enumerator.split_name("x.") is None


@pytest.mark.parametrize(
    "columns, expected",
    [
        (["id", "name"], "select [id],[name] from [dbo].[orders]"),
        ([], "select * from [dbo].[orders]"),
        (None, "select * from [dbo].[orders]"),
    ],
)
def test_build_select_sql(bracket_connection, columns, expected):
    """Columns are quoted individually; none means all columns."""
    enumerator = CatalogEnumerator(bracket_connection, policy=DefaultSchemaPolicy())

    assert enumerator.build_select_sql("dbo.orders", columns) == expected


def test_build_select_sql_keeps_unparseable_names(bracket_connection):
    """Names that cannot be split are used literally."""
    enumerator = CatalogEnumerator(bracket_connection, policy=DefaultSchemaPolicy())

    assert enumerator.build_select_sql("a.b.c.d") == "select * from a.b.c.d"
