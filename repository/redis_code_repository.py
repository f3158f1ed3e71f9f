import logging
from typing import Dict, Optional
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from core.paginator import Paginator
from model.code import CodeRecord, PageResult
from repository.code_store import page_result
from repository.namespace_index import NamespaceIndex
from repository.namespaces import code_key
from util.constants import CODE_FIELD, HASH_FIELD
from util.functions import to_str

logger = logging.getLogger(__name__)


class RedisCodeRepository:
    """
    Redis-backed code records: one hash per (namespace, id) with `code` and
    `hash` fields, plus membership in the global NamespaceIndex.

    A record exists iff its `hash` field exists.
    """

    def __init__(
        self,
        client: Optional[Redis] = None,
        key_prefix: str = settings.REDIS_KEY_PREFIX,
        index: Optional[NamespaceIndex] = None,
    ) -> None:
        self._redis = client
        self._prefix = key_prefix
        self._index = index or NamespaceIndex(client, key_prefix=key_prefix)

    async def _client(self) -> Redis:
        if self._redis is not None:
            return self._redis
        return await get_redis()

    def _key(self, namespace: str, code_id: str) -> str:
        return code_key(namespace, code_id, self._prefix)

    async def ping(self) -> bool:
        r = await self._client()
        return bool(await r.ping())

    async def list_namespaces(self, page: int = 1, per_page: int = 10) -> PageResult:
        Paginator.check(page, per_page)
        total = await self._index.count()
        paginator = Paginator(page, per_page, total)
        items = await self._index.range(paginator.start, paginator.stop)
        return page_result(paginator, items)

    async def get(self, namespace: str, code_id: str) -> Optional[CodeRecord]:
        r = await self._client()
        h = await r.hgetall(self._key(namespace, code_id))
        if not h:
            return None

        data: Dict[str, str] = {to_str(k): to_str(v) for k, v in h.items()}
        if data.get(HASH_FIELD) is None:
            return None
        return CodeRecord(
            namespace=namespace,
            id=code_id,
            code=data.get(CODE_FIELD, ""),
            hash=data[HASH_FIELD],
        )

    async def get_hash(self, namespace: str, code_id: str) -> Optional[str]:
        r = await self._client()
        return to_str(await r.hget(self._key(namespace, code_id), HASH_FIELD))

    async def put(self, namespace: str, code_id: str, code: str, hash: str) -> None:
        r = await self._client()
        await r.hset(
            self._key(namespace, code_id),
            mapping={CODE_FIELD: code, HASH_FIELD: hash},
        )
        await self._index.add(namespace, code_id)
        logger.info("code.put ns=%s id=%s hash=%s", namespace, code_id, hash)

    async def post(self, namespace: str, code_id: str, code: str, hash: str) -> bool:
        """
        Create-once: each field is written only if absent. Both HSETNX go out in
        one non-transactional round trip, so two racing creators can each win
        one field; that splice is neither detected nor repaired.
        Membership is registered only when both fields were freshly set.
        """
        r = await self._client()
        key = self._key(namespace, code_id)
        pipe = r.pipeline(transaction=False)
        pipe.hsetnx(key, CODE_FIELD, code)
        pipe.hsetnx(key, HASH_FIELD, hash)
        code_set, hash_set = await pipe.execute()

        created = bool(code_set) and bool(hash_set)
        if created:
            await self._index.add(namespace, code_id)
            logger.info("code.created ns=%s id=%s hash=%s", namespace, code_id, hash)
        elif bool(code_set) != bool(hash_set):
            logger.warning(
                "code.post.partial ns=%s id=%s code_set=%s hash_set=%s",
                namespace,
                code_id,
                bool(code_set),
                bool(hash_set),
            )
        return created

    async def delete(self, namespace: str, code_id: str) -> None:
        # Index first: a listing must never point at a vanished record.
        await self._index.remove(namespace, code_id)
        r = await self._client()
        await r.delete(self._key(namespace, code_id))
        logger.info("code.deleted ns=%s id=%s", namespace, code_id)
