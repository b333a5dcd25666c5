from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..models import Word
from .errors import InvalidPagination, UnsupportedSortType
from .store import MAX_SQL_INTEGER

DEFAULT_SORT_TYPE = "normal"
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class SortSpec:
    token: str
    field: str
    descending: bool
    description: str

    def order_by(self) -> List[Any]:
        """Primary column, then id in the same direction so ties never reorder."""
        primary = getattr(Word, self.field)
        if self.descending:
            return [primary.desc(), Word.id.desc()]
        return [primary.asc(), Word.id.asc()]


SORT_TYPES: Dict[str, SortSpec] = {
    spec.token: spec
    for spec in (
        SortSpec("least_revised", "no_of_times_revised", False, "Words revised the fewest times first"),
        SortSpec("most_difficult", "no_of_times_opened", True, "Words opened the most times first"),
        SortSpec("normal", "no_of_times_revised", False, "Default order, same as least_revised"),
        SortSpec("most_revised", "no_of_times_revised", True, "Words revised the most times first"),
        SortSpec("least_opened", "no_of_times_opened", False, "Words opened the fewest times first"),
        SortSpec("newest_first", "created_at", True, "Most recently added words first"),
        SortSpec("oldest_first", "created_at", False, "Earliest added words first"),
        SortSpec("alphabetical", "word", False, "A to Z"),
        SortSpec("reverse_alphabetical", "word", True, "Z to A"),
    )
}

# Plain /getWords listing: most opened first
DEFAULT_LISTING = SortSpec("listing", "no_of_times_opened", True, "Words opened the most times first")


def resolve_sort(token: Optional[str]) -> SortSpec:
    if token is None or token.strip() == "":
        return SORT_TYPES[DEFAULT_SORT_TYPE]
    spec = SORT_TYPES.get(token.strip().lower())
    if spec is None:
        raise UnsupportedSortType(
            f"Invalid sort type '{token}'.",
            validTypes=list(SORT_TYPES),
        )
    return spec


def sorting_types() -> List[Dict[str, str]]:
    return [{"type": s.token, "description": s.description} for s in SORT_TYPES.values()]


@dataclass(frozen=True)
class Pagination:
    limit: int
    page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)


def _parse_int(name: str, raw: Optional[str], default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise InvalidPagination(f"{name} must be an integer.")


def parse_pagination(limit: Optional[str] = None, page: Optional[str] = None) -> Pagination:
    """Validate raw query values: 1 <= limit <= 100 and page >= 1."""
    lim = _parse_int("limit", limit, DEFAULT_LIMIT)
    pg = _parse_int("page", page, 1)
    if not 1 <= lim <= MAX_LIMIT:
        raise InvalidPagination(f"limit must be between 1 and {MAX_LIMIT}.")
    if pg < 1:
        raise InvalidPagination("page must be 1 or greater.")
    pagination = Pagination(limit=lim, page=pg)
    if pagination.offset > MAX_SQL_INTEGER:
        raise InvalidPagination("page is too large.")
    return pagination
