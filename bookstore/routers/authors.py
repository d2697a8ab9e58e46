from fastapi import APIRouter, Depends, Query

from bookstore.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from bookstore.schemas.author import AuthorCreate, AuthorResponse, AuthorUpdate
from bookstore.schemas.book import BookPageResponse
from bookstore.schemas.error import ErrorResponse
from bookstore.services import catalog, query
from bookstore.services.store import CatalogStore, get_store

router = APIRouter(
    prefix="/authors",
    tags=["authors"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)


@router.get("", response_model=list[AuthorResponse])
async def list_authors(store: CatalogStore = Depends(get_store)):
    return await catalog.list_authors(store)


@router.get("/{author_id}", response_model=AuthorResponse)
async def get_author(author_id: int, store: CatalogStore = Depends(get_store)):
    return await catalog.get_author(store, author_id)


@router.get("/{author_id}/books", response_model=BookPageResponse)
async def list_author_books(
    author_id: int,
    page: int = Query(0, description="Page number (0-indexed)"),
    size: int = Query(DEFAULT_PAGE_SIZE, le=MAX_PAGE_SIZE, description="Number of items per page"),
    sort_by: str = Query("id", alias="sortBy"),
    sort_dir: str = Query("asc", alias="sortDir"),
    store: CatalogStore = Depends(get_store),
):
    result = await query.list_author_books(
        store, author_id, page=page, size=size, sort_by=sort_by, sort_dir=sort_dir
    )
    return BookPageResponse.model_validate(result)


@router.post("", response_model=AuthorResponse, status_code=201)
async def create_author(data: AuthorCreate, store: CatalogStore = Depends(get_store)):
    return await catalog.create_author(store, name=data.name, email=data.email)


@router.put("/{author_id}", response_model=AuthorResponse)
async def update_author(author_id: int, data: AuthorUpdate, store: CatalogStore = Depends(get_store)):
    return await catalog.update_author(store, author_id, name=data.name, email=data.email)


@router.delete("/{author_id}", status_code=204)
async def delete_author(author_id: int, store: CatalogStore = Depends(get_store)):
    await catalog.delete_author(store, author_id)
