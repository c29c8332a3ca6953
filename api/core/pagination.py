"""
Page/limit parsing and pagination metadata.
"""

from __future__ import annotations

import math
from typing import Any

from core import config


def _to_int(v: Any, default: int) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def parse_page(raw: Any) -> int:
    page = _to_int(raw, config.DEFAULT_PAGE)
    return page if page >= 1 else config.DEFAULT_PAGE


def parse_limit(raw: Any) -> int:
    limit = _to_int(raw, config.DEFAULT_LIMIT)
    if limit < 1:
        limit = config.DEFAULT_LIMIT
    return min(limit, config.page_limit_max())


def offset_for(page: int, limit: int) -> int:
    return min((page - 1) * limit, config.MAX_BIGINT)


def page_meta(total: int, page: int, limit: int) -> dict[str, int]:
    return {
        "total": total,
        "totalPages": math.ceil(total / limit),
        "currentPage": page,
        "limit": limit,
    }
