"""
Grid layout planning for the image menu.

``plan_layout()`` turns one page of a ``QueryResult`` into a
``LayoutPlan``: how many columns fit the display width, how wide each
box is, how the page's entries are grouped by category and which
footer lines go under the grid. The plan is plain data; turning it
into markup is ``markup.build_markup()``'s job and turning markup into
pixels belongs to the rendering service.

The text menu reuses the same plan (groups and footer), so both output
modes always agree on grouping and pagination hints.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .schemas import ItemBox, LayoutGroup, LayoutPlan, MenuEntry, QueryResult


DEFAULT_GAP_PX = 16
DEFAULT_PADDING_PX = 24


def column_count(display_width: int, min_column_width: int) -> int:
    """Number of columns of at least ``min_column_width`` that fit."""
    if min_column_width <= 0:
        raise ValueError("min_column_width must be positive")
    return max(1, display_width // min_column_width)


def item_box(display_width: int, columns: int, gap_px: int, padding_px: int) -> ItemBox:
    """Size boxes so ``columns`` boxes and ``columns - 1`` gaps fill a row.

    The flex basis is ``100 / columns`` percent reduced by each box's
    share of the gaps, which gives the same width as
    ``(row_width - gap * (columns - 1)) / columns``.
    """
    row_width = max(0, display_width - 2 * padding_px)
    gaps = gap_px * (columns - 1)
    return ItemBox(
        flex_basis_percent=100 / columns,
        gap_offset_px=gaps / columns,
        width_px=(row_width - gaps) / columns,
        gap_px=gap_px,
    )


def group_entries(entries: List[MenuEntry], by_category: bool) -> List[LayoutGroup]:
    """Partition a page by category, in first-seen order on that page."""
    if not by_category:
        return [LayoutGroup(category=None, entries=list(entries))]
    buckets: Dict[str, List[MenuEntry]] = {}
    for entry in entries:
        buckets.setdefault(entry.category, []).append(entry)
    return [LayoutGroup(category=cat, entries=items) for cat, items in buckets.items()]


def next_page_command(
    page: int,
    category: Optional[str],
    command_name: str = "menu",
    page_size: Optional[int] = None,
) -> str:
    """Command that shows the page after ``page`` in the same window.

    ``page_size`` is only appended when given; callers leave it out when
    the window uses the configured default size.
    """
    cmd = f"{command_name} -p {page + 1}"
    if category:
        # quoted so the command parser keeps it as one argument
        if any(ch.isspace() for ch in category):
            category = '"{}"'.format(category.replace('"', '\\"'))
        cmd += f" -c {category}"
    if page_size is not None:
        cmd += f" -s {page_size}"
    return cmd


def footer_lines(
    result: QueryResult,
    footer_text: Optional[str],
    command_name: str = "menu",
    default_page_size: Optional[int] = None,
) -> List[str]:
    lines: List[str] = []
    if result.total_pages > 1:
        lines.append(f"第 {result.page}/{result.total_pages} 页")
    if result.show_all:
        lines.append(f"已显示全部 {result.total} 项")
    elif result.page < result.total_pages:
        size = result.page_size if result.page_size != default_page_size else None
        hint = next_page_command(result.page, result.category, command_name, size)
        lines.append(f"使用 {hint} 查看下一页")
    if footer_text and footer_text.strip():
        lines.append(footer_text.strip())
    return lines


def plan_layout(
    result: QueryResult,
    *,
    display_width: int,
    min_column_width: int,
    group_by_category: bool = True,
    footer_text: Optional[str] = None,
    gap_px: int = DEFAULT_GAP_PX,
    padding_px: int = DEFAULT_PADDING_PX,
    command_name: str = "menu",
    default_page_size: Optional[int] = None,
) -> LayoutPlan:
    """Build the grid description for the entries of ``result``.

    ``default_page_size`` is the configured page size; a window of any
    other size gets an explicit size option in the next-page hint.
    """
    columns = column_count(display_width, min_column_width)
    return LayoutPlan(
        columns=columns,
        display_width=display_width,
        padding_px=padding_px,
        box=item_box(display_width, columns, gap_px, padding_px),
        grouped=group_by_category,
        groups=group_entries(result.items, group_by_category),
        footer=footer_lines(result, footer_text, command_name, default_page_size),
        page=result.page,
        total_pages=result.total_pages,
        total=result.total,
        show_all=result.show_all,
        category_filter=result.category,
    )
