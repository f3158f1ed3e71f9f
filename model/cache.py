from dataclasses import dataclass
from typing import Any


@dataclass
class CacheEntry:
    """
    Prepared artifact plus the hash of the source it was built from.
    """

    hash: str
    artifact: Any
