"""
Field-to-column mapping descriptors for the repositories.

Every repository declares which entity attributes are persisted and the
column each one lives in. Relationships are declared with BelongsTo and
stored as a "<name>Id" column holding the related entity's id.
"""

from dataclasses import dataclass
from typing import Optional


class MappingError(Exception):
    """Raised when an entity cannot be converted to or from a database row."""


def camelize(name: str) -> str:
    """Convert an attribute name to its column name (avatar_number -> avatarNumber)."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


@dataclass(frozen=True)
class Field:
    """
    A plain persisted attribute.

    Attributes:
        attribute: Attribute name on the entity
        column: Column name in the table (defaults to the camelCase attribute name)
    """
    attribute: str
    column: Optional[str] = None

    def __post_init__(self):
        if self.column is None:
            object.__setattr__(self, "column", camelize(self.attribute))


@dataclass(frozen=True)
class BelongsTo:
    """
    A many-to-one relationship.

    The attribute holds the related entity; the column holds its id.

    Attributes:
        attribute: Attribute name on the entity (e.g. "programmer")
        repository: Name of the related repository in the RepositoryContainer
        column: Column name (defaults to "<attribute>Id", e.g. "programmerId")
    """
    attribute: str
    repository: str
    column: Optional[str] = None

    def __post_init__(self):
        if self.column is None:
            object.__setattr__(self, "column", camelize(self.attribute) + "Id")
