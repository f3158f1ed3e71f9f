from pydantic import BaseModel


class CodeRecord(BaseModel):
    namespace: str
    id: str
    code: str
    hash: str


class NamespaceItem(BaseModel):
    namespace: str
    id: str


class PageResult(BaseModel):
    items: list[NamespaceItem]
    page: int
    perPage: int
    previousPage: int | None = None
    nextPage: int | None = None
