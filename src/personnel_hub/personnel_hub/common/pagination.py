from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT

    @classmethod
    def from_args(cls, args) -> "PageRequest":
        try:
            page = int(args.get("page", DEFAULT_PAGE))
            limit = int(args.get("limit", DEFAULT_PAGE_LIMIT))
        except (TypeError, ValueError):
            raise ValidationError("page and limit must be integers")
        if page < 1 or not 1 <= limit <= MAX_PAGE_LIMIT:
            raise ValidationError(f"page must be >= 1 and limit between 1 and {MAX_PAGE_LIMIT}")
        return cls(page=page, limit=limit)


def paginate(
    items: Sequence[Any],
    paging: Optional[PageRequest],
    *,
    key: str,
    render: Callable[[Any], Any] = lambda x: x,
) -> dict:
    """Slice an already ordered, fully fetched list into one page."""

    total = len(items)
    if paging is None:
        return {
            key: [render(i) for i in items],
            "total": total,
            "page": 1,
            "limit": total,
            "total_pages": 1,
        }

    start = (paging.page - 1) * paging.limit
    window = items[start : start + paging.limit]
    return {
        key: [render(i) for i in window],
        "total": total,
        "page": paging.page,
        "limit": paging.limit,
        "total_pages": math.ceil(total / paging.limit) if total else 0,
    }
