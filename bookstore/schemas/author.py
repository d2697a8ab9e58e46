from pydantic import BaseModel, ConfigDict


class AuthorCreate(BaseModel):
    name: str
    email: str


class AuthorUpdate(AuthorCreate):
    pass


class AuthorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
