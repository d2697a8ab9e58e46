from fastapi import APIRouter, Depends, Query

from bookstore.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from bookstore.schemas.book import BookCreate, BookPageResponse, BookResponse, BookUpdate
from bookstore.schemas.error import ErrorResponse
from bookstore.services import catalog, query
from bookstore.services.store import CatalogStore, get_store

router = APIRouter(
    prefix="/books",
    tags=["books"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)


@router.get("", response_model=BookPageResponse)
async def list_books(
    page: int = Query(0, description="Page number (0-indexed)"),
    size: int = Query(DEFAULT_PAGE_SIZE, le=MAX_PAGE_SIZE, description="Number of items per page"),
    sort_by: str = Query("id", alias="sortBy", description="Sort field: id, title, price or isbn"),
    sort_dir: str = Query("asc", alias="sortDir", description="Sort direction (asc or desc)"),
    title: str | None = Query(None, description="Filter by book title (case-insensitive partial match)"),
    author_name: str | None = Query(None, alias="authorName", description="Filter by author name (case-insensitive partial match)"),
    store: CatalogStore = Depends(get_store),
):
    result = await query.list_books(
        store,
        page=page,
        size=size,
        sort_by=sort_by,
        sort_dir=sort_dir,
        title=title,
        author_name=author_name,
    )
    return BookPageResponse.model_validate(result)


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: int, store: CatalogStore = Depends(get_store)):
    return await catalog.get_book(store, book_id)


@router.post("", response_model=BookResponse, status_code=201)
async def create_book(data: BookCreate, store: CatalogStore = Depends(get_store)):
    return await catalog.create_book(
        store, title=data.title, isbn=data.isbn, price=data.price, author_id=data.author_id
    )


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(book_id: int, data: BookUpdate, store: CatalogStore = Depends(get_store)):
    return await catalog.update_book(
        store, book_id, title=data.title, isbn=data.isbn, price=data.price, author_id=data.author_id
    )


@router.delete("/{book_id}", status_code=204)
async def delete_book(book_id: int, store: CatalogStore = Depends(get_store)):
    await catalog.delete_book(store, book_id)
