"""
Pydantic schema definitions for the catalog module.

The ``MenuEntry`` model captures one invocable feature of the chat
menu: its display name, the literal command users type, a category
label and its display order. ``QueryResult`` bundles a window of
entries with pagination metadata, and ``LayoutPlan`` describes the
grid a rendered (image) menu is laid out on.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


DEFAULT_DESCRIPTION = "暂无描述"


class MenuEntry(BaseModel):
    """A single menu entry.

    ``permissions`` lists the capabilities a caller must hold to see the
    entry. An empty list means the entry is visible to everyone.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str
    command: str
    category: str
    enabled: bool = True
    order: int = 1
    permissions: List[str] = Field(default_factory=list)


class QueryResult(BaseModel):
    """A window of the filtered and sorted entry sequence.

    ``page_size`` is ``None`` in show-all mode, in which case ``items``
    holds every filtered entry and ``total_pages`` is 1.
    """

    items: List[MenuEntry]
    total: int
    page: int
    page_size: Optional[int] = None
    total_pages: int
    show_all: bool = False
    category: Optional[str] = None


class ItemBox(BaseModel):
    """Sizing shared by every box of the grid."""

    flex_basis_percent: float
    gap_offset_px: float
    width_px: float
    gap_px: int


class LayoutGroup(BaseModel):
    # category is None for an ungrouped grid
    category: Optional[str] = None
    entries: List[MenuEntry]


class LayoutPlan(BaseModel):
    """Renderer-agnostic grid description for one page of entries."""

    columns: int
    display_width: int
    padding_px: int
    box: ItemBox
    grouped: bool
    groups: List[LayoutGroup]
    footer: List[str] = Field(default_factory=list)
    page: int
    total_pages: int
    total: int
    show_all: bool = False
    category_filter: Optional[str] = None
