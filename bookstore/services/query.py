"""Compose paginated, sorted and filtered book listings."""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import ColumnElement, and_, true

from bookstore.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from bookstore.errors import InvalidArgument
from bookstore.models import Author, Book
from bookstore.services.store import MAX_INTEGER, CatalogStore

SORTABLE_FIELDS = {
    "id": Book.id,
    "title": Book.title,
    "price": Book.price,
    "isbn": Book.isbn,
}


@dataclass
class BookPage:
    books: list[Book] = field(default_factory=list)
    current_page: int = 0
    total_items: int = 0
    total_pages: int = 0


def title_contains(value: str) -> ColumnElement[bool]:
    return Book.title.icontains(value, autoescape=True)


def author_name_contains(value: str) -> ColumnElement[bool]:
    return Author.name.icontains(value, autoescape=True)


def author_id_equals(author_id: int) -> ColumnElement[bool]:
    return Book.author_id == author_id


def combine(predicates: Iterable[ColumnElement[bool]]) -> ColumnElement[bool]:
    """AND the predicates together; an empty list is the predicate ``true``."""
    return and_(true(), *predicates)


def filter_predicates(title: str | None = None, author_name: str | None = None) -> list[ColumnElement[bool]]:
    predicates = []
    if title is not None:
        predicates.append(title_contains(title))
    if author_name is not None:
        predicates.append(author_name_contains(author_name))
    return predicates


def order_clause(sort_by: str, sort_dir: str) -> list[ColumnElement[Any]]:
    """Translate sort parameters into ORDER BY columns.

    Anything other than ``desc`` (case-insensitive) sorts ascending. Ties are
    broken by id so that page windows don't overlap.
    """
    column = SORTABLE_FIELDS.get(sort_by)
    if column is None:
        raise InvalidArgument(
            f"Cannot sort by '{sort_by}'; expected one of: {', '.join(SORTABLE_FIELDS)}",
            resource="Book",
            field="sortBy",
            value=sort_by,
        )
    order = [column.desc() if sort_dir.lower() == "desc" else column.asc()]
    if sort_by != "id":
        order.append(Book.id.asc())
    return order


def _check_window(page: int, size: int) -> None:
    if page < 0:
        raise InvalidArgument("Page index must not be negative", field="page", value=page)
    if size <= 0:
        raise InvalidArgument("Page size must be positive", field="size", value=size)
    if size > MAX_PAGE_SIZE:
        raise InvalidArgument(f"Page size must not exceed {MAX_PAGE_SIZE}", field="size", value=size)
    if page * size > MAX_INTEGER:
        raise InvalidArgument("Page index is out of range", field="page", value=page)


async def fetch_page(
    store: CatalogStore,
    predicates: Iterable[ColumnElement[bool]],
    page: int = 0,
    size: int = DEFAULT_PAGE_SIZE,
    sort_by: str = "id",
    sort_dir: str = "asc",
) -> BookPage:
    _check_window(page, size)
    order = order_clause(sort_by, sort_dir)
    books, total = await store.query_books(combine(predicates), order, offset=page * size, limit=size)
    return BookPage(
        books=books,
        current_page=page,
        total_items=total,
        total_pages=math.ceil(total / size),
    )


async def list_books(
    store: CatalogStore,
    page: int = 0,
    size: int = DEFAULT_PAGE_SIZE,
    sort_by: str = "id",
    sort_dir: str = "asc",
    title: str | None = None,
    author_name: str | None = None,
) -> BookPage:
    """List books, optionally filtered by title and/or author name substrings.

    Both filters are case-insensitive and combine with AND. ``None`` means the
    filter is absent; an empty string is present but matches every book.
    """
    return await fetch_page(
        store,
        filter_predicates(title=title, author_name=author_name),
        page=page,
        size=size,
        sort_by=sort_by,
        sort_dir=sort_dir,
    )


async def list_author_books(
    store: CatalogStore,
    author_id: int,
    page: int = 0,
    size: int = DEFAULT_PAGE_SIZE,
    sort_by: str = "id",
    sort_dir: str = "asc",
) -> BookPage:
    await store.get(Author, author_id)
    return await fetch_page(
        store,
        [author_id_equals(author_id)],
        page=page,
        size=size,
        sort_by=sort_by,
        sort_dir=sort_dir,
    )
