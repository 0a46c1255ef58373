"""Schema policy interface and the permissive default policy."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class SchemaMetaData:
    """Where and how a backend reports its tables or views.

    Attributes:
        schema_table: Metadata collection holding the objects
        name_column: Column with the object name
        schema_column: Column with the schema name, None if not reported
        table_type_column: Column with the object type, None to skip type checks
        valid_table_types: Accepted object types when a type column is set
        invalid_schemas: Schemas whose objects are hidden
    """

    schema_table: str
    name_column: str
    schema_column: Optional[str] = None
    table_type_column: Optional[str] = None
    valid_table_types: Optional[Tuple[str, ...]] = None
    invalid_schemas: Optional[Tuple[str, ...]] = None

    def accepts_table_type(self, table_type: Optional[str]) -> bool:
        """Check a row's type; rows without a type value always pass."""
        if self.table_type_column is None or table_type is None:
            return True
        return _contains_ignore_case(self.valid_table_types, table_type)

    def is_invalid_schema(self, schema: Optional[str]) -> bool:
        """Check whether objects in this schema must be hidden."""
        if schema is None:
            return False
        return _contains_ignore_case(self.invalid_schemas, schema)


def _contains_ignore_case(values: Optional[Tuple[str, ...]], candidate: str) -> bool:
    # None is treated as an empty list
    if values is None:
        return False
    lowered = candidate.lower()
    for value in values:
        if value.lower() == lowered:
            return True
    return False


class SchemaPolicy(ABC):
    """Provider-specific metadata shape and default schema computation."""

    @abstractmethod
    def schema_metadata(self) -> Tuple[SchemaMetaData, ...]:
        """Metadata sources to enumerate, in order."""
        pass

    @abstractmethod
    def default_schema(self, connection) -> Optional[str]:
        """Default schema of the connected user.

        Returns:
            Schema name, or None when there is none or it cannot be determined
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class DefaultSchemaPolicy(SchemaPolicy):
    """Bare minimum that should vaguely work for any backend."""

    def schema_metadata(self) -> Tuple[SchemaMetaData, ...]:
        return (SchemaMetaData(schema_table="Tables", name_column="TABLE_NAME"),)

    def default_schema(self, connection) -> Optional[str]:
        return None
