import hashlib
from typing import Tuple


def code_hash(code: str) -> str:
    """
    Content digest used as the version stamp of a code record (sha1 hex).
    """
    return hashlib.sha1(code.encode("utf-8")).hexdigest()


def member_token(namespace: str, code_id: str) -> str:
    return f"{namespace}:{code_id}"


def parse_member_token(token: str) -> Tuple[str, str]:
    """
    - Split a "<namespace>:<id>" token on the FIRST colon.
    - A token without a colon yields an empty id.
    """
    namespace, _, code_id = token.partition(":")
    return namespace, code_id


def to_str(value) -> str | None:
    if value is None:
        return None
    return value.decode("utf-8") if isinstance(value, (bytes, bytearray)) else str(value)
