from bookstore.models.author import Author
from bookstore.models.book import Book

__all__ = ["Author", "Book"]
