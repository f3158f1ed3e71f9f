import bisect
from typing import Dict, List, Optional, Tuple
from core.paginator import Paginator
from model.code import CodeRecord, NamespaceItem, PageResult
from repository.code_store import page_result
from util.constants import CODE_FIELD, HASH_FIELD
from util.functions import member_token, parse_member_token


class MemoryCodeRepository:
    """
    In-process stand-in for RedisCodeRepository with the same field-level
    semantics (HSETNX-style post, hash-field existence, index-first delete).
    Used by tests and local runs without Redis.
    """

    def __init__(self) -> None:
        self._records: Dict[Tuple[str, str], Dict[str, str]] = {}
        self._members: List[str] = []

    async def ping(self) -> bool:
        return True

    # ---------------- Namespace index ----------------

    def _add_member(self, namespace: str, code_id: str) -> None:
        token = member_token(namespace, code_id)
        i = bisect.bisect_left(self._members, token)
        if i == len(self._members) or self._members[i] != token:
            self._members.insert(i, token)

    def _remove_member(self, namespace: str, code_id: str) -> None:
        token = member_token(namespace, code_id)
        i = bisect.bisect_left(self._members, token)
        if i < len(self._members) and self._members[i] == token:
            del self._members[i]

    async def list_namespaces(self, page: int = 1, per_page: int = 10) -> PageResult:
        Paginator.check(page, per_page)
        paginator = Paginator(page, per_page, len(self._members))
        items = []
        for token in self._members[paginator.start : paginator.stop + 1]:
            namespace, code_id = parse_member_token(token)
            items.append(NamespaceItem(namespace=namespace, id=code_id))
        return page_result(paginator, items)

    # ---------------- Core CRUD ----------------

    async def get(self, namespace: str, code_id: str) -> Optional[CodeRecord]:
        fields = self._records.get((namespace, code_id))
        if not fields or HASH_FIELD not in fields:
            return None
        return CodeRecord(
            namespace=namespace,
            id=code_id,
            code=fields.get(CODE_FIELD, ""),
            hash=fields[HASH_FIELD],
        )

    async def get_hash(self, namespace: str, code_id: str) -> Optional[str]:
        return self._records.get((namespace, code_id), {}).get(HASH_FIELD)

    async def put(self, namespace: str, code_id: str, code: str, hash: str) -> None:
        fields = self._records.setdefault((namespace, code_id), {})
        fields[CODE_FIELD] = code
        fields[HASH_FIELD] = hash
        self._add_member(namespace, code_id)

    async def post(self, namespace: str, code_id: str, code: str, hash: str) -> bool:
        fields = self._records.setdefault((namespace, code_id), {})
        code_set = CODE_FIELD not in fields
        if code_set:
            fields[CODE_FIELD] = code
        hash_set = HASH_FIELD not in fields
        if hash_set:
            fields[HASH_FIELD] = hash

        created = code_set and hash_set
        if created:
            self._add_member(namespace, code_id)
        return created

    async def delete(self, namespace: str, code_id: str) -> None:
        self._remove_member(namespace, code_id)
        self._records.pop((namespace, code_id), None)

    # Test helper: write a single raw field, as a partial/corrupted record would look.
    def set_field(self, namespace: str, code_id: str, field: str, value: str) -> None:
        self._records.setdefault((namespace, code_id), {})[field] = value
