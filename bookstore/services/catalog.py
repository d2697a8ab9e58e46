"""Create, update and delete authors and books while keeping catalog invariants.

Every write checks field rules, referenced authors and unique keys before it
commits. The unique constraints on ``authors.email`` and ``books.isbn`` still
back these checks up at commit time, see ``CatalogStore``.
"""

import logging
import math

from bookstore.errors import Conflict, InvalidArgument
from bookstore.models import Author, Book
from bookstore.services.store import CatalogStore

logger = logging.getLogger(__name__)


def _require_text(resource: str, field: str, value: str | None) -> None:
    if value is None or not value.strip():
        raise InvalidArgument(f"{resource} {field} is required", resource, field, value)


def _validate_author(name: str, email: str) -> None:
    _require_text("Author", "name", name)
    _require_text("Author", "email", email)


def _validate_book(title: str, isbn: str, price: float) -> None:
    _require_text("Book", "title", title)
    _require_text("Book", "isbn", isbn)
    if price is None or not math.isfinite(price) or price <= 0:
        raise InvalidArgument("Price must be a positive finite number", "Book", "price", price)


# --- authors ---


async def list_authors(store: CatalogStore) -> list[Author]:
    return await store.list_authors()


async def get_author(store: CatalogStore, author_id: int) -> Author:
    return await store.get(Author, author_id)


async def create_author(store: CatalogStore, name: str, email: str) -> Author:
    _validate_author(name, email)
    if await store.exists_by_unique_key(Author, email):
        raise Conflict(f"Author with email {email} already exists", "Author", "email", email)

    author = await store.save(Author(name=name, email=email))
    await store.commit()
    logger.info("Created author %d (%s)", author.id, author.email)
    return author


async def update_author(store: CatalogStore, author_id: int, name: str, email: str) -> Author:
    author = await store.get(Author, author_id)
    _validate_author(name, email)
    if author.email != email and await store.exists_by_unique_key(Author, email):
        raise Conflict(f"Author with email {email} already exists", "Author", "email", email)

    author.name = name
    author.email = email
    await store.save(author)
    await store.commit()
    logger.info("Updated author %d", author.id)
    return author


async def delete_author(store: CatalogStore, author_id: int) -> None:
    """Delete an author. Authors that still have books cannot be deleted."""
    author = await store.get(Author, author_id)
    book_count = await store.count_books_by_author(author_id)
    if book_count:
        raise Conflict(
            f"Author {author_id} still has {book_count} book(s); delete them first",
            "Author",
            "books",
            book_count,
        )

    await store.delete(author)
    await store.commit()
    logger.info("Deleted author %d", author_id)


# --- books ---


async def get_book(store: CatalogStore, book_id: int) -> Book:
    return await store.get(Book, book_id)


async def create_book(
    store: CatalogStore, title: str, isbn: str, price: float, author_id: int
) -> Book:
    _validate_book(title, isbn, price)
    author = await store.get(Author, author_id)
    if await store.exists_by_unique_key(Book, isbn):
        raise Conflict(f"Book with ISBN {isbn} already exists", "Book", "isbn", isbn)

    book = await store.save(Book(title=title, isbn=isbn, price=price, author=author))
    await store.commit()
    logger.info("Created book %d (isbn=%s) for author %d", book.id, book.isbn, author.id)
    return book


async def update_book(
    store: CatalogStore, book_id: int, title: str, isbn: str, price: float, author_id: int
) -> Book:
    """Replace a book's title, ISBN, price and author.

    The ISBN is only re-checked for uniqueness when it changes, so saving a
    book with its own ISBN never conflicts. Nothing is modified unless every
    check passes.
    """
    book = await store.get(Book, book_id)
    _validate_book(title, isbn, price)
    author = await store.get(Author, author_id)
    if book.isbn != isbn and await store.exists_by_unique_key(Book, isbn):
        raise Conflict(f"Book with ISBN {isbn} already exists", "Book", "isbn", isbn)

    book.title = title
    book.isbn = isbn
    book.price = price
    book.author = author
    await store.save(book)
    await store.commit()
    logger.info("Updated book %d", book.id)
    return book


async def delete_book(store: CatalogStore, book_id: int) -> None:
    book = await store.get(Book, book_id)
    await store.delete(book)
    await store.commit()
    logger.info("Deleted book %d", book_id)
