from typing import Final


class InternalURIs:
    FUNCTIONS = "/functions"
    FUNCTION_ITEM = FUNCTIONS + "/{namespace}/{id}"
    HEALTHCHECK = "/healthcheck"


# Field names inside each code hash
CODE_FIELD: Final[str] = "code"
HASH_FIELD: Final[str] = "hash"

# Every namespace member shares this weight so ZRANGE falls back to lexicographic order
MEMBER_WEIGHT: Final[int] = 0
