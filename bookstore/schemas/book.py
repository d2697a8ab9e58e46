from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from bookstore.schemas.author import AuthorResponse


class BookCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    isbn: str
    price: float = Field(allow_inf_nan=False)
    author_id: int = Field(alias="authorId")

    @model_validator(mode="before")
    @classmethod
    def accept_nested_author(cls, data):
        # Also accept {"author": {"id": 1}} in place of {"authorId": 1}
        if isinstance(data, dict) and "authorId" not in data and "author_id" not in data:
            author = data.get("author")
            if isinstance(author, dict) and "id" in author:
                data = {**data, "authorId": author["id"]}
        return data


class BookUpdate(BookCreate):
    pass


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    isbn: str
    price: float
    author: AuthorResponse


class BookPageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    books: list[BookResponse]
    current_page: int
    total_items: int
    total_pages: int
