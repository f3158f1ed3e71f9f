from typing import Optional
from util.errors import PaginationError


class Paginator:
    """
    Turns (page, per_page, total) into an inclusive [start, stop] window
    suitable for ZRANGE, plus previous/next page hints.
    """

    def __init__(self, page: int, per_page: int, total: int) -> None:
        self.page = page
        self.per_page = per_page
        self.total = total
        self.error: Optional[str] = self._validate(page, per_page)
        self.is_valid = self.error is None

        self.start = (page - 1) * per_page
        self.stop = self.start + per_page - 1

        self.previous_page: Optional[int] = page - 1 if page > 1 else None
        self.next_page: Optional[int] = page + 1 if self.stop < total - 1 else None

    @staticmethod
    def _validate(page: int, per_page: int) -> Optional[str]:
        if page < 1:
            return "Page must be greater or equal to 1"
        if per_page < 1:
            return "perPage must be greater or equal to 1"
        return None

    @classmethod
    def check(cls, page: int, per_page: int) -> None:
        error = cls._validate(page, per_page)
        if error:
            raise PaginationError(error)
