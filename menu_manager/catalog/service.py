"""
Catalog facade: one coroutine per menu command.

``CatalogFacade`` ties the store, the query pipeline, the layout
planner and the external collaborators (authorization predicate,
renderer, suggestion sink) together and turns every outcome into a
``CommandResult`` with a user-visible message. Domain errors never
escape as exceptions; the router only has to map outcomes to status
codes.

Mutating commands check authorization before touching the store, and
the authorization check is the only place they suspend, so a command
that has passed it runs to completion without interleaving.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Protocol

from fastapi.concurrency import run_in_threadpool

from ..auth import Authorizer, resolve
from ..config import Settings
from ..models import (
    AddEntryRequest,
    BrowseRequest,
    Caller,
    CommandResult,
    EditEntryRequest,
    RecategorizeRequest,
    Suggestion,
    SuggestRequest,
)
from . import formatting as fmt
from .errors import CatalogValidationError, DuplicateEntryId, EntryNotFound, RenderError
from .ids import generate_id
from .layout import plan_layout
from .markup import build_markup
from .query import list_categories, query_entries, search_entries
from .schemas import DEFAULT_DESCRIPTION, LayoutPlan, MenuEntry, QueryResult
from .store import EntryStore


logger = logging.getLogger(__name__)

MIN_PAGE_SIZE = 5
MAX_PAGE_SIZE = 50


class Renderer(Protocol):
    def render(self, markup: str, width: int, height: int) -> bytes: ...


class SuggestionSink(Protocol):
    def submit(self, suggestion: Suggestion) -> None: ...


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class CatalogFacade:
    def __init__(
        self,
        store: EntryStore,
        settings: Settings,
        authorizer: Authorizer,
        renderer: Optional[Renderer] = None,
        suggestion_sink: Optional[SuggestionSink] = None,
        id_generator: Callable[[str], str] = generate_id,
    ) -> None:
        self.store = store
        self.settings = settings
        self.authorizer = authorizer
        self.renderer = renderer
        self.suggestion_sink = suggestion_sink
        self.id_generator = id_generator

    # ------------------------------------------------------------------
    # Authorization and visibility

    async def is_authorized(self, caller: Caller, capability: str) -> bool:
        if not caller.user_id:
            return False
        return await resolve(self.authorizer, caller, capability)

    async def _is_admin(self, caller: Caller, action: str) -> bool:
        if await self.is_authorized(caller, self.settings.admin_permission):
            return True
        logger.warning("Denied menu %s for user %s", action, caller.user_id)
        return False

    async def visible_entries(self, caller: Caller) -> List[MenuEntry]:
        """Entries the caller may see: those whose permissions it holds."""
        verdicts: Dict[str, bool] = {}
        visible: List[MenuEntry] = []
        for entry in self.store.list_all():
            for capability in entry.permissions:
                if capability not in verdicts:
                    verdicts[capability] = await self.is_authorized(caller, capability)
                if not verdicts[capability]:
                    break
            else:
                visible.append(entry)
        return visible

    # ------------------------------------------------------------------
    # Read commands

    def page_size(self, request: BrowseRequest) -> int:
        size = request.page_size or self.settings.items_per_page
        return min(MAX_PAGE_SIZE, max(MIN_PAGE_SIZE, size))

    async def _query(self, caller: Caller, request: BrowseRequest) -> QueryResult:
        entries = await self.visible_entries(caller)
        return query_entries(
            entries,
            category=request.category,
            enabled_only=True,
            page=request.page,
            page_size=None if request.show_all else self.page_size(request),
        )

    def _plan(self, result: QueryResult) -> LayoutPlan:
        return plan_layout(
            result,
            display_width=self.settings.image_width,
            min_column_width=self.settings.min_column_width,
            group_by_category=self.settings.enable_categories,
            footer_text=self.settings.footer_text,
            default_page_size=self.settings.items_per_page,
        )

    def wants_image(self, request: BrowseRequest) -> bool:
        # image output is only ever produced when enabled in settings
        if not self.settings.enable_image_menu:
            return False
        return request.image_mode is not False

    async def browse(self, caller: Caller, request: Optional[BrowseRequest] = None) -> CommandResult:
        request = request or BrowseRequest()
        result = await self._query(caller, request)
        if not result.items:
            return CommandResult(message=fmt.empty_menu(request.category))
        plan = self._plan(result)
        if self.wants_image(request):
            return await self._render(plan)
        return CommandResult(message=fmt.menu_text(plan), entries=result.items, plan=plan)

    async def plan(self, caller: Caller, request: Optional[BrowseRequest] = None) -> CommandResult:
        """Return the layout plan for a browse request without rendering it."""
        request = request or BrowseRequest()
        result = await self._query(caller, request)
        plan = self._plan(result)
        message = fmt.menu_text(plan) if result.items else fmt.empty_menu(request.category)
        return CommandResult(message=message, entries=result.items, plan=plan)

    async def _render(self, plan: LayoutPlan) -> CommandResult:
        entries = [e for group in plan.groups for e in group.entries]
        if self.renderer is None:
            logger.warning("Image menu requested but no renderer is configured")
            return CommandResult(outcome="unavailable", message=fmt.RENDER_APOLOGY, plan=plan)
        markup = build_markup(plan, fmt.MENU_TITLE)
        try:
            image = await run_in_threadpool(
                self.renderer.render, markup, self.settings.image_width, self.settings.image_height
            )
        except RenderError as exc:
            logger.warning("Menu image rendering failed: %s", exc)
            return CommandResult(outcome="unavailable", message=fmt.RENDER_APOLOGY, plan=plan)
        except Exception:
            logger.exception("Unexpected error while rendering the menu image")
            return CommandResult(outcome="unavailable", message=fmt.RENDER_APOLOGY, plan=plan)
        return CommandResult(message=fmt.MENU_TITLE, entries=entries, plan=plan, image=image)

    async def list_entries(self, caller: Caller, category: Optional[str] = None) -> CommandResult:
        """Detailed listing, disabled entries included."""
        entries = await self.visible_entries(caller)
        result = query_entries(entries, category=category, enabled_only=False)
        return CommandResult(
            message=fmt.entry_list_text(result.items, result.category),
            entries=result.items,
        )

    async def search(self, caller: Caller, keyword: Optional[str]) -> CommandResult:
        entries = await self.visible_entries(caller)
        try:
            matches = search_entries(entries, keyword or "")
        except CatalogValidationError:
            return CommandResult(outcome="invalid", message=fmt.MISSING_KEYWORD)
        return CommandResult(message=fmt.search_text(matches, _clean(keyword)), entries=matches)

    async def list_categories(self, caller: Caller) -> CommandResult:
        categories = list_categories(await self.visible_entries(caller))
        return CommandResult(message=fmt.categories_text(categories))

    # ------------------------------------------------------------------
    # Mutating commands

    async def add(self, caller: Caller, request: AddEntryRequest) -> CommandResult:
        if not await self._is_admin(caller, "add"):
            return CommandResult(outcome="denied", message=fmt.DENIED)
        name, command = _clean(request.name), _clean(request.command)
        if not name or not command:
            return CommandResult(outcome="invalid", message=fmt.MISSING_NAME_OR_COMMAND)

        entry = MenuEntry(
            id=self.id_generator(name),
            name=name,
            description=_clean(request.description) or DEFAULT_DESCRIPTION,
            command=command,
            category=_clean(request.category) or self.settings.default_category,
            order=request.order if request.order is not None else len(self.store) + 1,
        )
        try:
            created = self.store.create(entry)
        except DuplicateEntryId as exc:
            logger.error("Generated id collided with an existing entry: %s", exc)
            return CommandResult(outcome="failed", message=fmt.ADD_FAILED)
        logger.info("User %s added menu entry %s (%s)", caller.user_id, created.id, created.name)
        return CommandResult(message=fmt.added(created), entry=created)

    async def edit(self, caller: Caller, entry_id: str, request: EditEntryRequest) -> CommandResult:
        if not await self._is_admin(caller, "edit"):
            return CommandResult(outcome="denied", message=fmt.DENIED)
        fields = {k: v for k, v in request.model_dump(exclude_unset=True).items() if v is not None}
        if not fields:
            return CommandResult(outcome="invalid", message=fmt.NOTHING_TO_EDIT)
        for key in ("name", "command", "category"):
            if key in fields:
                fields[key] = _clean(fields[key])
                if not fields[key]:
                    message = fmt.MISSING_CATEGORY if key == "category" else fmt.MISSING_NAME_OR_COMMAND
                    return CommandResult(outcome="invalid", message=message)
        try:
            entry = self.store.update(entry_id, fields)
        except EntryNotFound:
            return CommandResult(outcome="not_found", message=fmt.not_found(entry_id))
        logger.info("User %s edited menu entry %s: %s", caller.user_id, entry_id, sorted(fields))
        return CommandResult(message=fmt.updated(entry), entry=entry)

    async def delete(self, caller: Caller, entry_id: str) -> CommandResult:
        if not await self._is_admin(caller, "delete"):
            return CommandResult(outcome="denied", message=fmt.DENIED)
        try:
            entry = self.store.delete(entry_id)
        except EntryNotFound:
            return CommandResult(outcome="not_found", message=fmt.not_found(entry_id))
        logger.info("User %s deleted menu entry %s", caller.user_id, entry_id)
        return CommandResult(message=fmt.deleted(entry), entry=entry)

    async def toggle(self, caller: Caller, entry_id: str) -> CommandResult:
        if not await self._is_admin(caller, "toggle"):
            return CommandResult(outcome="denied", message=fmt.DENIED)
        try:
            entry = self.store.toggle_enabled(entry_id)
        except EntryNotFound:
            return CommandResult(outcome="not_found", message=fmt.not_found(entry_id))
        logger.info("User %s set menu entry %s enabled=%s", caller.user_id, entry_id, entry.enabled)
        return CommandResult(message=fmt.toggled(entry), entry=entry)

    async def recategorize(
        self, caller: Caller, entry_id: str, request: RecategorizeRequest
    ) -> CommandResult:
        if not await self._is_admin(caller, "recategorize"):
            return CommandResult(outcome="denied", message=fmt.DENIED)
        category = _clean(request.category)
        if not category:
            return CommandResult(outcome="invalid", message=fmt.MISSING_CATEGORY)
        try:
            old_category = self.store.get(entry_id).category
            entry = self.store.update(entry_id, {"category": category})
        except EntryNotFound:
            return CommandResult(outcome="not_found", message=fmt.not_found(entry_id))
        logger.info(
            "User %s moved menu entry %s from %r to %r",
            caller.user_id, entry_id, old_category, category,
        )
        return CommandResult(message=fmt.moved(entry, old_category), entry=entry)

    # ------------------------------------------------------------------
    # Suggestions and lifecycle

    async def suggest(self, caller: Caller, request: SuggestRequest) -> CommandResult:
        """Forward a proposed entry to the suggestion sink.

        The catalog itself is never modified. Sink failures are logged
        and do not change the reply.
        """
        if not self.settings.allow_user_suggestions:
            return CommandResult(outcome="disabled", message=fmt.SUGGESTIONS_DISABLED)
        name, command = _clean(request.name), _clean(request.command)
        if not name or not command:
            return CommandResult(outcome="invalid", message=fmt.MISSING_NAME_OR_COMMAND)
        suggestion = Suggestion(
            name=name,
            command=command,
            description=_clean(request.description) or DEFAULT_DESCRIPTION,
            user_id=caller.user_id,
        )
        if self.suggestion_sink is not None:
            try:
                self.suggestion_sink.submit(suggestion)
            except Exception:
                logger.exception("Suggestion sink failed for %r", suggestion.name)
        return CommandResult(message=fmt.suggestion_received(name))

    def shutdown(self) -> None:
        self.store.clear()
        logger.info("Menu catalog cleared")
