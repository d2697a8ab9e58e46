import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from bookstore.config import LOG_LEVEL
from bookstore.database import init_db
from bookstore.errors import register_exception_handlers
from bookstore.routers import authors, books


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield


def create_app() -> FastAPI:
    logging.getLogger("bookstore").setLevel(LOG_LEVEL)

    app = FastAPI(
        title="Bookstore",
        version="0.1.0",
        description="Manage authors and their books.",
        lifespan=lifespan,
    )
    register_exception_handlers(app)
    app.include_router(authors.router)
    app.include_router(books.router)
    return app


app = create_app()
