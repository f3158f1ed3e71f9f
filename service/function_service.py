import logging
from typing import Any, Optional
from core.cache_reader import CacheCoherentReader
from model.code import CodeRecord, PageResult
from repository.code_store import CodeStore
from util.enums import ErrorMessage
from util.errors import AppError
from util.functions import code_hash
from util.types import PreCache

logger = logging.getLogger(__name__)


class FunctionService:
    """
    Entry point for the HTTP layer: CRUD and listing go straight to the
    store, execution paths go through the read-through reader.
    Storage errors are never caught here.
    """

    def __init__(self, store: CodeStore, reader: CacheCoherentReader) -> None:
        self._store = store
        self._reader = reader

    async def ping(self) -> bool:
        return await self._store.ping()

    async def list_namespaces(self, page: int = 1, per_page: int = 10) -> PageResult:
        return await self._store.list_namespaces(page, per_page)

    async def create_code(self, namespace: str, code_id: str, code: str) -> CodeRecord:
        record = CodeRecord(namespace=namespace, id=code_id, code=code, hash=code_hash(code))
        created = await self._store.post(namespace, code_id, record.code, record.hash)
        if not created:
            logger.info("code.post.noop ns=%s id=%s", namespace, code_id)
        return record

    async def update_code(self, namespace: str, code_id: str, code: str) -> CodeRecord:
        record = CodeRecord(namespace=namespace, id=code_id, code=code, hash=code_hash(code))
        await self._store.put(namespace, code_id, record.code, record.hash)
        return record

    async def get_code(self, namespace: str, code_id: str) -> CodeRecord:
        record = await self._store.get(namespace, code_id)
        if record is None:
            raise AppError(
                ErrorMessage.CODE_NOT_FOUND.value.message,
                ErrorMessage.CODE_NOT_FOUND.value.http_status,
            )
        return record

    async def delete_code(self, namespace: str, code_id: str) -> None:
        await self._store.delete(namespace, code_id)

    async def get_code_by_cache(
        self, namespace: str, code_id: str, pre_cache: PreCache
    ) -> Optional[Any]:
        return await self._reader.read_through(namespace, code_id, pre_cache)
