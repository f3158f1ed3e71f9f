"""
Shared fixtures.

Async code is driven with asyncio.run() from plain test functions; every
fakeredis client is created inside the coroutine that uses it so it binds to
that test's event loop.
"""

from typing import Callable

import pytest

from tests.helpers import fake_redis


@pytest.fixture(params=["memory", "redis"])
def make_store(request) -> Callable[[], object]:
    """Factory for each CodeStore variant; call it inside the running loop."""
    from repository.memory_code_repository import MemoryCodeRepository
    from repository.redis_code_repository import RedisCodeRepository

    if request.param == "memory":
        return MemoryCodeRepository

    def _redis_store():
        return RedisCodeRepository(fake_redis(), key_prefix="")

    return _redis_store


@pytest.fixture
def pristine_root():
    """Restore root logger handlers/level after code that calls init_logger()."""
    import logging

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    if hasattr(root, "_functions_storage_inited"):
        del root._functions_storage_inited
