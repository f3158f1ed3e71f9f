from typing import List, Optional, Protocol
from core.paginator import Paginator
from model.code import CodeRecord, NamespaceItem, PageResult


class CodeStore(Protocol):
    """
    Storage capability shared by the Redis-backed and in-memory repositories.
    A missing record is always reported as None, never raised.
    """

    async def ping(self) -> bool: ...

    async def list_namespaces(self, page: int = 1, per_page: int = 10) -> PageResult: ...

    async def get(self, namespace: str, code_id: str) -> Optional[CodeRecord]: ...

    async def get_hash(self, namespace: str, code_id: str) -> Optional[str]: ...

    async def put(self, namespace: str, code_id: str, code: str, hash: str) -> None: ...

    async def post(self, namespace: str, code_id: str, code: str, hash: str) -> bool: ...

    async def delete(self, namespace: str, code_id: str) -> None: ...


def page_result(paginator: Paginator, items: List[NamespaceItem]) -> PageResult:
    return PageResult(
        items=items,
        page=paginator.page,
        perPage=paginator.per_page,
        previousPage=paginator.previous_page,
        nextPage=paginator.next_page,
    )
