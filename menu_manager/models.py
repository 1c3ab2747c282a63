# menu_manager/models.py
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field
from typing_extensions import Literal

from .catalog.schemas import LayoutPlan, MenuEntry


class Caller(BaseModel):
    """Who issued a command, as reported by the chat platform or gateway."""

    user_id: Optional[str] = None
    authority: int = 0
    capabilities: List[str] = Field(default_factory=list)


class BrowseRequest(BaseModel):
    category: Optional[str] = None
    page: int = Field(default=1, ge=1)
    page_size: Optional[int] = Field(
        default=None,
        description="Override of the configured page size, clamped to 5..50.",
    )
    image_mode: Optional[bool] = Field(
        default=None,
        description="Render as an image. None follows the enable_image_menu setting.",
    )
    show_all: bool = False


class AddEntryRequest(BaseModel):
    name: str
    command: str
    description: Optional[str] = None
    category: Optional[str] = None
    order: Optional[int] = None


class EditEntryRequest(BaseModel):
    """Partial update: only fields that are explicitly set are applied."""

    name: Optional[str] = None
    description: Optional[str] = None
    command: Optional[str] = None
    category: Optional[str] = None
    order: Optional[int] = None
    permissions: Optional[List[str]] = None


class RecategorizeRequest(BaseModel):
    category: str


class SuggestRequest(BaseModel):
    name: str
    command: str
    description: Optional[str] = None


class Suggestion(BaseModel):
    name: str
    command: str
    description: str
    user_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


Outcome = Literal["ok", "invalid", "not_found", "failed", "denied", "unavailable", "disabled"]


class CommandResult(BaseModel):
    """User-visible response to one menu command."""

    outcome: Outcome = "ok"
    message: str
    entry: Optional[MenuEntry] = None
    entries: List[MenuEntry] = Field(default_factory=list)
    plan: Optional[LayoutPlan] = None
    image: Optional[bytes] = Field(default=None, exclude=True)

    @computed_field
    @property
    def ok(self) -> bool:
        return self.outcome == "ok"
