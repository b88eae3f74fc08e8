# Services/query_params.py
"""Lenient parsing of listing query strings; bad values fall back, never fail."""
from typing import Optional

from config import DEFAULT_PAGE_SIZE

# Keeps the row offset, (page - 1) * limit, inside a signed 64-bit integer
MAX_PAGE_VALUE = 2 ** 31 - 1


def _positive_int(raw: Optional[str], default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return min(max(value, 1), MAX_PAGE_VALUE)


def page_params(page_number: Optional[str], page_size: Optional[str]):
    """Return (page, limit): non-numeric input gets the default, values are clamped to [1, MAX_PAGE_VALUE]."""
    return _positive_int(page_number, 1), _positive_int(page_size, DEFAULT_PAGE_SIZE)


def sort_direction(sort_order: Optional[str]) -> str:
    return "desc" if sort_order == "desc" else "asc"


def bool_flag(raw: Optional[str]) -> Optional[bool]:
    """Only the literal strings "true" and "false" filter."""
    if raw == "true":
        return True
    if raw == "false":
        return False
    return None
