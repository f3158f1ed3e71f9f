from typing import List, Optional
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from model.code import NamespaceItem
from repository.namespaces import namespaces_key
from util.constants import MEMBER_WEIGHT
from util.functions import member_token, parse_member_token, to_str


class NamespaceIndex:
    """
    Flow:
    - One sorted set holds a "<namespace>:<id>" token per stored code record.
    - Every token has weight 0, so ZRANGE returns them in lexicographic order
      and pagination is stable without a separate index.
    """

    def __init__(
        self, client: Optional[Redis] = None, key_prefix: str = settings.REDIS_KEY_PREFIX
    ) -> None:
        self._redis = client
        self._key = namespaces_key(key_prefix)

    async def _client(self) -> Redis:
        if self._redis is not None:
            return self._redis
        return await get_redis()

    async def add(self, namespace: str, code_id: str) -> None:
        r = await self._client()
        await r.zadd(self._key, {member_token(namespace, code_id): MEMBER_WEIGHT})

    async def remove(self, namespace: str, code_id: str) -> None:
        r = await self._client()
        await r.zrem(self._key, member_token(namespace, code_id))

    async def count(self) -> int:
        r = await self._client()
        return int(await r.zcount(self._key, "-inf", "+inf"))

    async def range(self, start: int, stop: int) -> List[NamespaceItem]:
        r = await self._client()
        tokens = await r.zrange(self._key, start, stop)
        out: List[NamespaceItem] = []
        for raw in tokens or []:
            namespace, code_id = parse_member_token(to_str(raw))
            out.append(NamespaceItem(namespace=namespace, id=code_id))
        return out
