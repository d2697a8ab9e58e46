from pydantic import BaseModel


class ErrorResponse(BaseModel):
    detail: str
    error: str
    resource: str | None = None
    field: str | None = None
    value: str | int | float | None = None
