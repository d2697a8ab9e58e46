"""Persistence primitives for the author/book aggregates.

The store is the only layer that talks to the session directly and the only
one that sees ``IntegrityError``: constraint violations raised at flush or
commit time are translated into the same ``Conflict``/``NotFound`` errors the
catalog service raises from its own checks.
"""

import logging
from typing import Any, TypeVar

from fastapi import Depends
from sqlalchemy import ColumnElement, exists, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from bookstore.database import get_session
from bookstore.errors import Conflict, Internal, NotFound
from bookstore.models import Author, Book

logger = logging.getLogger(__name__)

Entity = TypeVar("Entity", Author, Book)

# Largest value an INTEGER column (and LIMIT/OFFSET) can hold.
MAX_INTEGER = 2**63 - 1

UNIQUE_KEYS = {
    Author: Author.email,
    Book: Book.isbn,
}

# Constraint names as reported by PostgreSQL, table.column as reported by SQLite.
_UNIQUE_CONSTRAINTS = {
    "uq_authors_email": ("Author", "email"),
    "authors.email": ("Author", "email"),
    "uq_books_isbn": ("Book", "isbn"),
    "books.isbn": ("Book", "isbn"),
}


class CatalogStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(self, kind: type[Entity], entity_id: int) -> Entity | None:
        if not -MAX_INTEGER <= entity_id <= MAX_INTEGER:
            return None
        return await self.session.get(kind, entity_id)

    async def get(self, kind: type[Entity], entity_id: int) -> Entity:
        entity = await self.find(kind, entity_id)
        if entity is None:
            raise NotFound(kind.__name__, "id", entity_id)
        return entity

    async def exists_by_unique_key(self, kind: type[Entity], key: str) -> bool:
        column = UNIQUE_KEYS[kind]
        return bool(await self.session.scalar(select(exists().where(column == key))))

    async def count_books_by_author(self, author_id: int) -> int:
        stmt = select(func.count(Book.id)).where(Book.author_id == author_id)
        return (await self.session.execute(stmt)).scalar() or 0

    async def list_authors(self) -> list[Author]:
        result = await self.session.execute(select(Author).order_by(Author.id))
        return list(result.scalars().all())

    async def query_books(
        self,
        predicate: ColumnElement[bool],
        order_by: list[ColumnElement[Any]],
        offset: int,
        limit: int,
    ) -> tuple[list[Book], int]:
        """Return one window of books matching ``predicate`` and the total match count.

        Books are always joined to their author so predicates and orderings may
        reference ``Author`` columns.
        """
        count_stmt = select(func.count(Book.id)).join(Book.author).where(predicate)
        total = (await self.session.execute(count_stmt)).scalar() or 0

        stmt = (
            select(Book)
            .join(Book.author)
            .options(contains_eager(Book.author))
            .where(predicate)
            .order_by(*order_by)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def save(self, entity: Entity) -> Entity:
        """Insert or update ``entity`` and flush so the store assigns its id."""
        self.session.add(entity)
        try:
            await self.session.flush()
        except IntegrityError as e:
            # Translate first: rollback expires the entity's loaded attributes.
            error = self._translate(e, entity)
            await self.session.rollback()
            raise error from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise Internal(f"Could not save {type(entity).__name__}", type(entity).__name__) from e
        return entity

    async def delete(self, entity: Author | Book) -> None:
        await self.session.delete(entity)
        try:
            await self.session.flush()
        except IntegrityError as e:
            error = self._translate(e, entity, deleting=True)
            await self.session.rollback()
            raise error from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise Internal(f"Could not delete {type(entity).__name__}", type(entity).__name__) from e

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            error = self._translate(e)
            await self.session.rollback()
            raise error from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise Internal("Could not commit transaction") from e

    def _translate(
        self,
        exc: IntegrityError,
        entity: Author | Book | None = None,
        deleting: bool = False,
    ) -> Conflict | NotFound | Internal:
        message = str(exc.orig)
        for marker, (resource, field) in _UNIQUE_CONSTRAINTS.items():
            if marker in message:
                value = getattr(entity, field, None) if type(entity).__name__ == resource else None
                logger.warning("Unique constraint %s rejected %s %s=%r", marker, resource, field, value)
                return Conflict(f"{resource} with {field} {value} already exists", resource, field, value)

        if "FOREIGN KEY" in message.upper():
            if deleting and isinstance(entity, Author):
                return Conflict(
                    f"Author {entity.id} still has books", "Author", "books", entity.id
                )
            if isinstance(entity, Book):
                return NotFound("Author", "id", entity.author_id)

        logger.error("Unexpected integrity error: %s", message)
        return Internal("Integrity error in store")


async def get_store(session: AsyncSession = Depends(get_session)) -> CatalogStore:
    return CatalogStore(session)
