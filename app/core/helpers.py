"""
Small helpers with no domain knowledge: id checks and page arithmetic.
"""

from __future__ import annotations

import math
import uuid


def validate_uuid(value) -> bool:
    """True for a uuid.UUID or anything whose str() parses as one."""
    if isinstance(value, uuid.UUID):
        return True
    try:
        uuid.UUID(str(value))
    except (TypeError, ValueError):
        return False
    return True


def calculate_pagination(total: int, page: int, per_page: int) -> dict:
    """
    Page metadata for ``total`` items split into pages of ``per_page``.

    ``page`` is 1-based and clamped into the existing range, so asking for
    page 9 of 3 describes page 3. ``start_index``/``end_index`` are the
    1-based positions of the first and last item on the page (0 when empty).
    """
    total_pages = math.ceil(total / per_page) if per_page > 0 else 0
    page = min(max(page, 1), max(total_pages, 1))
    has_next = page < total_pages
    has_previous = page > 1

    return {
        "total": total,
        "page": page,
        "per_page": per_page,
        "total_pages": total_pages,
        "has_next": has_next,
        "has_previous": has_previous,
        "next_page": page + 1 if has_next else None,
        "previous_page": page - 1 if has_previous else None,
        "start_index": (page - 1) * per_page + 1 if total else 0,
        "end_index": min(page * per_page, total),
    }
