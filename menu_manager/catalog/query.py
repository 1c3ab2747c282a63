"""
Query pipeline over a snapshot of menu entries.

Everything here is a pure function of its arguments: the same entries
and filters always produce the same result, and the input sequence is
never modified.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence

from .errors import CatalogValidationError
from .schemas import MenuEntry, QueryResult


def _norm(s: Optional[str]) -> str:
    """Normalize a string for case-insensitive comparison."""
    return (s or "").strip().lower()


def _sorted_by_order(entries: Iterable[MenuEntry]) -> List[MenuEntry]:
    # sorted() is stable, so equal orders keep their input position
    return sorted(entries, key=lambda e: e.order)


def query_entries(
    entries: Sequence[MenuEntry],
    *,
    category: Optional[str] = None,
    enabled_only: bool = True,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
) -> QueryResult:
    """Filter, sort and paginate ``entries``.

    Parameters
    ----------
    entries : Sequence[MenuEntry]
        Snapshot of the catalog, in store order.
    category : Optional[str]
        Keep only entries whose category contains this text
        (case-insensitive). Blank means no category filter.
    enabled_only : bool
        Drop disabled entries.
    page : Optional[int]
        1-indexed page number, clamped to at least 1. Defaults to 1.
    page_size : Optional[int]
        Entries per page. ``None`` selects show-all mode: the whole
        filtered sequence is returned as a single page.

    Returns
    -------
    QueryResult
        The window of entries with the pre-pagination total and the
        page count. A page past the end yields an empty window.
    """
    items = list(entries)
    if enabled_only:
        items = [e for e in items if e.enabled]
    ncat = _norm(category)
    if ncat:
        items = [e for e in items if ncat in _norm(e.category)]
    items = _sorted_by_order(items)
    total = len(items)
    category = category if ncat else None

    if page_size is None:
        return QueryResult(
            items=items,
            total=total,
            page=1,
            page_size=None,
            total_pages=1,
            show_all=True,
            category=category,
        )

    if page_size < 1:
        raise CatalogValidationError("page size must be at least 1")
    p = max(1, page or 1)
    start = (p - 1) * page_size
    end = start + page_size
    return QueryResult(
        items=items[start:end],
        total=total,
        page=p,
        page_size=page_size,
        total_pages=max(1, math.ceil(total / page_size)),
        show_all=False,
        category=category,
    )


def search_entries(entries: Sequence[MenuEntry], keyword: str) -> List[MenuEntry]:
    """Return every entry whose name, description, command or category
    contains ``keyword`` (case-insensitive), ordered by display order."""
    nq = _norm(keyword)
    if not nq:
        raise CatalogValidationError("search keyword is empty")

    def _matches(entry: MenuEntry) -> bool:
        fields = (entry.name, entry.description, entry.command, entry.category)
        return any(nq in _norm(f) for f in fields)

    return _sorted_by_order(e for e in entries if _matches(e))


def list_categories(entries: Iterable[MenuEntry]) -> List[str]:
    """Distinct categories in first-seen order."""
    seen: List[str] = []
    for entry in entries:
        if entry.category not in seen:
            seen.append(entry.category)
    return seen
