import pytest

from core.artifact_cache import CompiledArtifactCache
from core.cache_reader import CacheCoherentReader
from model.cache import CacheEntry
from repository.memory_code_repository import MemoryCodeRepository
from service.function_service import FunctionService
from tests.helpers import run
from util.errors import AppError


def _service():
    store = MemoryCodeRepository()
    return FunctionService(store, CacheCoherentReader(store, CompiledArtifactCache()))


def test_create_and_update_hash_the_code():
    async def scenario():
        service = _service()
        created = await service.create_code("ns", "fn", "a")
        updated = await service.update_code("ns", "fn", "b")
        return created, updated, await service.get_code("ns", "fn")

    created, updated, stored = run(scenario())
    assert created.hash != updated.hash
    assert stored == updated


def test_get_code_missing_raises_404():
    async def scenario():
        await _service().get_code("ns", "missing")

    with pytest.raises(AppError) as exc:
        run(scenario())
    assert exc.value.status_code == 404


def test_get_code_by_cache_uses_pre_cache():
    calls = []

    def pre_cache(record):
        calls.append(record.id)
        return CacheEntry(hash=record.hash, artifact=f"compiled:{record.code}")

    async def scenario():
        service = _service()
        await service.update_code("ns", "fn", "body")
        first = await service.get_code_by_cache("ns", "fn", pre_cache)
        second = await service.get_code_by_cache("ns", "fn", pre_cache)
        missing = await service.get_code_by_cache("ns", "nope", pre_cache)
        return first, second, missing

    assert run(scenario()) == ("compiled:body", "compiled:body", None)
    assert calls == ["fn"]
