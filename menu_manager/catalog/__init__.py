"""
Catalog package for the chat menu.

This package holds the in-memory entry store, the query pipeline that
filters, sorts and paginates entries, the grid layout planner for the
image menu and the facade that exposes all of it as menu commands.
The HTTP routes live in ``router`` and are mounted by
``menu_manager.main``.
"""

from .errors import (  # noqa: F401
    CatalogError,
    CatalogValidationError,
    DuplicateEntryId,
    EntryNotFound,
    RendererUnavailable,
    RenderError,
    RenderFailure,
)
from .schemas import LayoutPlan, MenuEntry, QueryResult  # noqa: F401
from .store import EntryStore  # noqa: F401
