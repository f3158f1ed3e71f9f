import asyncio
from typing import Awaitable, Optional, TypeVar

import fakeredis

T = TypeVar("T")


def run(coro: Awaitable[T]) -> T:
    return asyncio.run(coro)


def fake_redis(server: Optional[fakeredis.FakeServer] = None) -> fakeredis.FakeAsyncRedis:
    return fakeredis.FakeAsyncRedis(server=server or fakeredis.FakeServer())
