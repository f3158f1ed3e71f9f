import inspect
import logging
from typing import Any, Optional
from core.artifact_cache import CompiledArtifactCache
from model.cache import CacheEntry
from repository.code_store import CodeStore
from util.timing import timed
from util.types import PreCache

logger = logging.getLogger(__name__)


class CacheCoherentReader:
    """
    Read-through cache of prepared artifacts, using the stored hash as a
    version stamp.

    Every lookup pays one cheap HGET of the hash field. A cached entry is
    reused only when its hash equals the stored one exactly; anything else
    fetches the full record, runs `pre_cache` once and overwrites the entry.
    Caches of different processes never talk to each other.
    """

    def __init__(self, store: CodeStore, cache: CompiledArtifactCache) -> None:
        self._store = store
        self._cache = cache

    async def read_through(
        self, namespace: str, code_id: str, pre_cache: PreCache
    ) -> Optional[Any]:
        current_hash = await self._store.get_hash(namespace, code_id)
        if current_hash is None:
            return None

        entry = self._cache.get(namespace, code_id)
        if entry is not None and entry.hash == current_hash:
            logger.debug("code.cache.hit ns=%s id=%s", namespace, code_id)
            return entry.artifact

        logger.info(
            "code.cache.miss ns=%s id=%s stale=%s", namespace, code_id, entry is not None
        )
        record = await self._store.get(namespace, code_id)
        if record is None:
            # Deleted between the hash read and the full fetch
            return None

        with timed(logger, "code.precache", ns=namespace, id=code_id):
            fresh = pre_cache(record)
            if inspect.isawaitable(fresh):
                fresh = await fresh

        if not isinstance(fresh, CacheEntry):
            raise TypeError(
                f"pre_cache must return a CacheEntry, got {type(fresh).__name__}"
            )
        self._cache.set(namespace, code_id, fresh)
        return fresh.artifact
