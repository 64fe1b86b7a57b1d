from typing import Any, Callable, Optional, Tuple

from seller_quotes.core.config import settings

DEFAULT_PAGE = 1


def invalid_param(value: Any) -> bool:
    """A query value is unusable when absent, blank, or not a single string."""
    return not isinstance(value, str) or not value.strip()


def build_search_clause(search: str) -> str:
    term = "*" + "*".join(search.replace("'", "").split()) + "*"
    return f"(referenceName='{term}' OR creatorEmail='{term}')"


def build_where(
    search: Optional[str] = None,
    status: Optional[str] = None,
    is_invalid: Callable[[Any], bool] = invalid_param,
) -> str:
    """
    Build the Master Data `_where` expression for the seller quote list.

    Search is a wildcard-contains match on reference name or creator email,
    status is an exact match. Clauses are AND-ed; no valid filter gives "".
    """
    filters = []

    if not is_invalid(search):
        filters.append(build_search_clause(search))

    if not is_invalid(status):
        filters.append(f"(status={status})")

    return " AND ".join(filters)


def _to_positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def normalize_pagination(page: Any, page_size: Any) -> Tuple[int, int]:
    return (
        _to_positive_int(page, DEFAULT_PAGE),
        _to_positive_int(page_size, settings.DEFAULT_PAGE_SIZE),
    )
