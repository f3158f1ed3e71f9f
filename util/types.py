from typing import Awaitable, Callable, TypeAlias, Union
from model.cache import CacheEntry
from model.code import CodeRecord


# Flow: caller-supplied preparation step (e.g. compilation); may be sync or async.
PreCache: TypeAlias = Callable[
    [CodeRecord], Union[CacheEntry, Awaitable[CacheEntry]]
]
