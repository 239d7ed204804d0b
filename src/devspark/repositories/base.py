"""Generic data access over one mapped entity type.

The services treat storage as a keyed document store: fetch by id, bulk
fetch, put, update by id, delete by predicate or by field match, and
paginated lookups. Every method flushes through the caller's session and
leaves transaction control to the caller.
"""
from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, inspect, select, update
from sqlalchemy.orm import InstrumentedAttribute, Session
from sqlalchemy.sql import ColumnElement

from devspark.core.settings import settings
from devspark.db.session import Base
from devspark.services.errors import ValidationError

__all__ = ["DeletePredicate", "Pagination", "Repository"]

ModelT = TypeVar("ModelT", bound=Base)


@dataclass(frozen=True)
class Pagination:
    """Zero-based page number and page size bounding one query."""

    page: int = 0
    size: int = field(default_factory=lambda: settings.default_page_size)

    @classmethod
    def from_params(cls, page: int | None, size: int | None) -> Pagination:
        """Validate raw page/size values.

        Raises:
            ValidationError: If the page is negative or the size is outside
                ``1..settings.max_page_size``.
        """
        pagination = cls(page=page or 0) if size is None else cls(page=page or 0, size=size)
        if pagination.page < 0:
            raise ValidationError("Page must not be negative")
        if pagination.size < 1 or pagination.size > settings.max_page_size:
            raise ValidationError(f"Page size must be between 1 and {settings.max_page_size}")
        return pagination

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def limit(self) -> int:
        return self.size


@dataclass(frozen=True)
class DeletePredicate:
    """Row selector for a delete: by id alone, or by id and owner together.

    Construct through :meth:`by_id` (forced deletes) or
    :meth:`by_id_and_owner` (owner-gated deletes). The owner check is part of
    the same statement, so the store evaluates both conditions atomically.
    """

    resource_id: str
    owner_id: str | None = None

    @classmethod
    def by_id(cls, resource_id: str) -> DeletePredicate:
        return cls(resource_id=resource_id)

    @classmethod
    def by_id_and_owner(cls, resource_id: str, owner_id: str) -> DeletePredicate:
        return cls(resource_id=resource_id, owner_id=owner_id)

    @property
    def forced(self) -> bool:
        return self.owner_id is None

    def clauses(self, model: type[Base]) -> list[ColumnElement[bool]]:
        """Return the WHERE clauses selecting the target row of ``model``."""
        clauses: list[ColumnElement[bool]] = [model.id == self.resource_id]  # type: ignore[attr-defined]
        if self.owner_id is not None:
            clauses.append(model.owner_id == self.owner_id)  # type: ignore[attr-defined]
        return clauses


class Repository(Generic[ModelT]):
    """Keyed store for one mapped class, bound to a session."""

    def __init__(self, db: Session, model: type[ModelT]) -> None:
        self.db = db
        self.model = model

    def _column(self, field: str) -> InstrumentedAttribute[Any]:
        column = getattr(self.model, field, None)
        if not isinstance(column, InstrumentedAttribute):
            raise AttributeError(f"{self.model.__name__} has no column {field!r}")
        return column

    def _ordering(self) -> list[Any]:
        # Creation time first, then the primary key so pages never reshuffle.
        ordering: list[Any] = []
        if hasattr(self.model, "created_at"):
            ordering.append(self._column("created_at"))
        ordering.extend(inspect(self.model).primary_key)
        return ordering

    def get(self, entity_id: str) -> ModelT | None:
        """Return the entity with ``entity_id`` or None."""
        return self.db.get(self.model, entity_id)

    def get_all(self, ids: Iterable[str], pagination: Pagination) -> list[ModelT]:
        """Return one page of the entities whose ids are in ``ids``."""
        wanted = list(set(ids))
        if not wanted:
            return []
        return self.find(self._column("id").in_(wanted), pagination=pagination)

    def exists(self, ids: Iterable[str]) -> bool:
        """Return True when every id in ``ids`` names a stored entity."""
        wanted = set(ids)
        if not wanted:
            return True
        found = self.db.scalar(
            select(func.count())
            .select_from(self.model)
            .where(self._column("id").in_(wanted))
        )
        return found == len(wanted)

    def put(self, entity: ModelT) -> ModelT:
        """Stage ``entity`` for insert (or pending changes) and flush."""
        self.db.add(entity)
        self.db.flush()
        return entity

    def update(self, entity_id: str, values: Mapping[str, Any]) -> bool:
        """Apply ``values`` to the row with ``entity_id``; True if one matched."""
        result = self.db.execute(
            update(self.model)
            .where(self._column("id") == entity_id)
            .values(**values)
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]

    def delete(self, predicate: DeletePredicate) -> bool:
        """Delete the row selected by ``predicate``; True if one was removed."""
        result = self.db.execute(
            delete(self.model).where(*predicate.clauses(self.model))
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]

    def delete_all(self, field: str, value: Any) -> int:
        """Delete every row whose ``field`` equals ``value``; return the count."""
        result = self.db.execute(delete(self.model).where(self._column(field) == value))
        return int(result.rowcount)  # type: ignore[attr-defined]

    def delete_in(self, field: str, values: Collection[Any]) -> int:
        """Delete every row whose ``field`` is one of ``values``; return the count."""
        if not values:
            return 0
        result = self.db.execute(
            delete(self.model).where(self._column(field).in_(list(values)))
        )
        return int(result.rowcount)  # type: ignore[attr-defined]

    def find(self, *criteria: ColumnElement[bool], pagination: Pagination) -> list[ModelT]:
        """Return one stable page of entities matching every criterion."""
        stmt = (
            select(self.model)
            .where(*criteria)
            .order_by(*self._ordering())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        return list(self.db.scalars(stmt))

    def find_by_field(self, field: str, value: Any, pagination: Pagination) -> list[ModelT]:
        """Return one page of entities whose ``field`` equals ``value``."""
        return self.find(self._column(field) == value, pagination=pagination)

    def find_all(self, pagination: Pagination) -> list[ModelT]:
        """Return one page of all entities."""
        return self.find(pagination=pagination)

    def ids_where(self, field: str, value: Any) -> list[str]:
        """Return the ids of every entity whose ``field`` equals ``value``."""
        return list(
            self.db.scalars(select(self._column("id")).where(self._column(field) == value))
        )
