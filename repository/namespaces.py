from typing import Final

CODE: Final[str] = "code"
NAMESPACES: Final[str] = "namespaces"


def code_key(namespace: str, code_id: str, prefix: str = "") -> str:
    return f"{prefix}{CODE}:{namespace}/{code_id}"


def namespaces_key(prefix: str = "") -> str:
    return f"{prefix}{NAMESPACES}"
