"""
Generic persistence for plain entity objects.

A repository saves an entity by reading the attributes listed in its
mapping table and writing them to the matching columns, and rebuilds
entities from rows the same way. BelongsTo attributes are stored as the
related entity's id and are loaded back through the RepositoryContainer.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from sqlalchemy import Table, select
from sqlalchemy.engine import Engine

from app.repository.container import RepositoryContainer
from app.repository.mapping import BelongsTo, Field, MappingError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DAY_FORMAT = "%Y-%m-%d"

SCALAR_TYPES = (str, int, float, bool, bytes)

MappedField = Union[Field, BelongsTo]


class BaseRepository:
    """
    Base class for all repositories.

    Subclasses set entity_class, table and fields. The first mapped field
    must be the "id" primary key.
    """

    entity_class: type = None
    table: Table = None
    fields: Sequence[MappedField] = ()

    def __init__(self, engine: Engine, repositories: RepositoryContainer):
        if self.entity_class is None or self.table is None:
            raise TypeError(f"{type(self).__name__} must define entity_class and table")

        self.engine = engine
        self.repositories = repositories
        self._by_attribute: Dict[str, MappedField] = {f.attribute: f for f in self.fields}
        self._by_column: Dict[str, MappedField] = {f.column: f for f in self.fields}

        if "id" not in self._by_attribute:
            raise TypeError(f"{type(self).__name__} does not map an 'id' field")

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def save(self, entity):
        """
        Save the entity: INSERT when it has no id yet, UPDATE otherwise.

        On insert the generated id is assigned to entity.id.

        Args:
            entity: Instance of entity_class

        Returns:
            The same entity

        Raises:
            MappingError: If entity is not an instance of entity_class, or a
                relationship attribute holds an object without an id
        """
        if not isinstance(entity, self.entity_class):
            raise MappingError(
                f"Expected {self.entity_class.__name__}, got {type(entity).__name__}"
            )

        data = self.extract_data(entity)
        data.pop(self._by_attribute["id"].column, None)

        with self.engine.begin() as conn:
            if entity.id:
                conn.execute(
                    self.table.update()
                    .where(self.table.c.id == entity.id)
                    .values(data)
                )
                logger.debug(f"Updated {self.table.name} #{entity.id}")
            else:
                result = conn.execute(self.table.insert().values(data))
                entity.id = result.inserted_primary_key[0]
                logger.debug(f"Inserted {self.table.name} #{entity.id}")

        return entity

    def delete(self, entity) -> None:
        """Delete the entity's row. Deleting a row that doesn't exist is a no-op."""
        if entity is None or not entity.id:
            return

        with self.engine.begin() as conn:
            conn.execute(self.table.delete().where(self.table.c.id == entity.id))

    def extract_data(self, entity) -> Dict[str, Any]:
        """
        Build the column -> value map for an entity.

        Datetimes become DATE_FORMAT strings and related entities are
        reduced to their id.
        """
        data = {}
        for mapped in self.fields:
            value = getattr(entity, mapped.attribute)
            data[mapped.column] = self._to_column_value(mapped, value)

        return data

    def _to_column_value(self, mapped: MappedField, value: Any) -> Any:
        if value is None:
            return None

        if isinstance(value, datetime):
            if value.utcoffset() is not None:
                raise MappingError(
                    f'Attribute "{mapped.attribute}" holds a timezone-aware datetime, '
                    f"but timestamps are stored without a zone"
                )
            return value.strftime(DATE_FORMAT)

        if isinstance(value, date):
            return value.strftime(DAY_FORMAT)

        if isinstance(mapped, BelongsTo) or not isinstance(value, SCALAR_TYPES):
            if not hasattr(value, "id"):
                raise MappingError(
                    f'Attribute "{mapped.attribute}" is an object, '
                    f"but it doesn't look like a relationship"
                )
            if not isinstance(mapped, BelongsTo):
                raise MappingError(
                    f'Attribute "{mapped.attribute}" holds a {type(value).__name__}, '
                    f"but it is not mapped as a relationship"
                )
            if value.id is None:
                raise MappingError(
                    f'Related {type(value).__name__} in "{mapped.attribute}" has not been saved yet'
                )
            return value.id

        return value

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def find(self, id):
        return self.find_one_by({"id": id})

    def find_one_by(self, criteria: Mapping[str, Any]):
        """
        Find the first entity whose attributes equal every value in criteria.

        Args:
            criteria: Attribute (or column) name -> value

        Returns:
            Hydrated entity, or None if no row matches
        """
        rows = self._fetch(self._build_query(criteria).limit(1))
        if not rows:
            return None

        return self.hydrate(rows[0])

    def find_all_by(self, criteria: Mapping[str, Any], limit: Optional[int] = None, operator: str = "=") -> List:
        """
        Find every entity matching criteria, in the order the database returns them.

        Args:
            criteria: Attribute (or column) name -> value, combined with AND
            limit: Maximum number of entities to return
            operator: "=" or "LIKE"

        Returns:
            List of hydrated entities
        """
        query = self._build_query(criteria, operator)
        if limit is not None:
            query = query.limit(limit)

        return [self.hydrate(row) for row in self._fetch(query)]

    def find_all(self) -> List:
        return self.find_all_by({})

    def find_all_like(self, criteria: Mapping[str, Any], limit: Optional[int] = None) -> List:
        return self.find_all_by(criteria, limit, operator="LIKE")

    def find_last(self):
        """Return the most recently inserted entity (highest id), or None."""
        rows = self._fetch(select(self.table).order_by(self.table.c.id.desc()).limit(1))
        if not rows:
            return None

        return self.hydrate(rows[0])

    def _build_query(self, criteria: Mapping[str, Any], operator: str = "="):
        if operator not in ("=", "LIKE"):
            raise ValueError(f"Unsupported operator '{operator}'")

        query = select(self.table)
        for key, value in criteria.items():
            column, value = self._criterion(key, value)
            if operator == "LIKE":
                query = query.where(column.like(value))
            else:
                query = query.where(column == value)

        return query

    def _criterion(self, key: str, value: Any) -> Tuple[Any, Any]:
        mapped = self._by_attribute.get(key) or self._by_column.get(key)
        if mapped is None:
            raise MappingError(f'Unknown field "{key}" for {self.entity_class.__name__}')

        if isinstance(mapped, BelongsTo) and hasattr(value, "id"):
            value = value.id
        elif isinstance(value, (datetime, date)):
            value = value.strftime(DATE_FORMAT)

        return self.table.c[mapped.column], value

    def _fetch(self, query) -> List[Mapping[str, Any]]:
        # Rows are fully read before hydrating, so relationship lookups
        # never run while this connection is still open.
        with self.engine.connect() as conn:
            return [dict(row) for row in conn.execute(query).mappings()]

    # ------------------------------------------------------------------
    # Hydration
    # ------------------------------------------------------------------

    def hydrate(self, row: Mapping[str, Any]):
        """
        Turn a row into an entity.

        Raises:
            MappingError: If a column is not mapped, or a foreign key points
                at a row that does not exist
        """
        entity = self.create_object(row)

        for column_name, value in row.items():
            mapped = self._by_column.get(column_name)
            if mapped is None:
                raise MappingError(
                    f'Column "{column_name}" of table "{self.table.name}" '
                    f"is not mapped on {self.entity_class.__name__}"
                )

            if isinstance(mapped, BelongsTo) and value is not None:
                related = self.repositories.get(mapped.repository).find(value)
                if related is None:
                    logger.error(f"Missing {mapped.repository} #{value} referenced by {self.table.name}.{column_name}")
                    raise MappingError(
                        f"Could not query for foreign key object {column_name} with id {value}"
                    )
                value = related

            setattr(entity, mapped.attribute, value)

        self.finish_hydrate(entity)

        return entity

    def create_object(self, row: Mapping[str, Any]):
        return self.entity_class()

    def finish_hydrate(self, entity) -> None:
        """Hook for subclasses to convert raw column values after assignment."""

    @staticmethod
    def normalize_date(entity, attribute: str) -> None:
        """Parse a stored date string attribute back into a datetime, or a date for DAY_FORMAT."""
        value = getattr(entity, attribute)
        if not isinstance(value, str):
            return
        if len(value) == len("YYYY-MM-DD"):
            setattr(entity, attribute, datetime.strptime(value, DAY_FORMAT).date())
        else:
            setattr(entity, attribute, datetime.strptime(value, DATE_FORMAT))
