from typing import Dict, Optional, Tuple
from model.cache import CacheEntry


class CompiledArtifactCache:
    """
    Process-local (namespace, id) -> CacheEntry map.

    Entries are never evicted: each carries the hash it was built from, so a
    stale entry simply stops matching the stored hash and gets overwritten.
    Create one per process and hand it to CacheCoherentReader.
    """

    def __init__(self) -> None:
        self._entries: Dict[Tuple[str, str], CacheEntry] = {}

    def get(self, namespace: str, code_id: str) -> Optional[CacheEntry]:
        return self._entries.get((namespace, code_id))

    def set(self, namespace: str, code_id: str, entry: CacheEntry) -> None:
        self._entries[(namespace, code_id)] = entry

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Tuple[str, str]) -> bool:
        return key in self._entries
