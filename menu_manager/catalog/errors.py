"""Exceptions raised by the catalog engine."""


class CatalogError(Exception):
    """Base class for catalog failures."""


class CatalogValidationError(CatalogError):
    """Required input is missing or malformed."""


class EntryNotFound(CatalogError):
    def __init__(self, entry_id: str) -> None:
        super().__init__(f"no menu entry with id {entry_id!r}")
        self.entry_id = entry_id


class DuplicateEntryId(CatalogError):
    def __init__(self, entry_id: str) -> None:
        super().__init__(f"menu entry id {entry_id!r} already exists")
        self.entry_id = entry_id


class RenderError(CatalogError):
    """Base class for image rendering failures."""


class RendererUnavailable(RenderError):
    """No rendering service is configured."""


class RenderFailure(RenderError):
    """The rendering service failed to produce an image."""
