from fastapi import Request
from core.artifact_cache import CompiledArtifactCache
from core.cache_reader import CacheCoherentReader
from repository.redis_code_repository import RedisCodeRepository
from service.function_service import FunctionService


def get_function_service(request: Request) -> FunctionService:
    # The artifact cache lives on app.state so it outlives individual requests.
    cache: CompiledArtifactCache = request.app.state.artifact_cache
    _store = RedisCodeRepository()
    _reader = CacheCoherentReader(_store, cache)
    return FunctionService(_store, _reader)
