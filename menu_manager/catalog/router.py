"""
Route definitions for the menu API.

Endpoints under /api/menu:
- GET    /entries                   : browse the menu (text or PNG)
- GET    /layout                    : layout plan of a browse request
- GET    /entries/all               : detailed listing, disabled entries included
- GET    /search                    : keyword search
- GET    /categories                : distinct categories
- POST   /entries                   : add an entry (admin)
- PATCH  /entries/{entry_id}        : partial edit (admin)
- DELETE /entries/{entry_id}        : delete (admin)
- POST   /entries/{entry_id}/toggle : enable/disable (admin)
- PUT    /entries/{entry_id}/category : move to another category (admin)
- POST   /suggestions               : suggest a new entry

The caller's identity is taken from headers set by the gateway or chat
adapter in front of this service: ``X-User-Id``, ``X-User-Authority``
and a comma-separated ``X-User-Capabilities``. These headers are trusted
as-is, so the service must only be reachable through that adapter, which
strips any client-supplied copies. ``X-User-Authority`` only grants admin
rights when ``admin_authority`` is configured.
"""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import APIRouter, Depends, Header, Query, Request, Response
from fastapi.responses import JSONResponse

from ..models import (
    AddEntryRequest,
    BrowseRequest,
    Caller,
    CommandResult,
    EditEntryRequest,
    RecategorizeRequest,
    SuggestRequest,
)
from .service import CatalogFacade


STATUS_BY_OUTCOME: Dict[str, int] = {
    "ok": 200,
    "invalid": 400,
    "not_found": 404,
    "failed": 409,
    "denied": 403,
    "unavailable": 503,
    "disabled": 403,
}

router = APIRouter(prefix="/api/menu", tags=["menu"])


def get_facade(request: Request) -> CatalogFacade:
    return request.app.state.facade


def get_caller(
    x_user_id: Optional[str] = Header(default=None),
    x_user_authority: int = Header(default=0),
    x_user_capabilities: Optional[str] = Header(default=None),
) -> Caller:
    capabilities = [c.strip() for c in (x_user_capabilities or "").split(",") if c.strip()]
    return Caller(user_id=x_user_id, authority=x_user_authority, capabilities=capabilities)


def _reply(result: CommandResult) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_OUTCOME[result.outcome],
        content=result.model_dump(mode="json"),
    )


def _browse_request(
    category: Optional[str] = Query(default=None, description="Category filter (substring)"),
    page: int = Query(default=1, ge=1, description="Page (1-indexed)"),
    page_size: Optional[int] = Query(default=None, description="Page size override"),
    image: Optional[bool] = Query(default=None, description="Render as PNG"),
    show_all: bool = Query(default=False, alias="all", description="Show every entry on one page"),
) -> BrowseRequest:
    return BrowseRequest(
        category=category, page=page, page_size=page_size, image_mode=image, show_all=show_all
    )


@router.get("/entries")
async def browse(
    browse_request: BrowseRequest = Depends(_browse_request),
    caller: Caller = Depends(get_caller),
    facade: CatalogFacade = Depends(get_facade),
):
    result = await facade.browse(caller, browse_request)
    if result.image is not None:
        return Response(content=result.image, media_type="image/png")
    return _reply(result)


@router.get("/layout")
async def layout(
    browse_request: BrowseRequest = Depends(_browse_request),
    caller: Caller = Depends(get_caller),
    facade: CatalogFacade = Depends(get_facade),
):
    return _reply(await facade.plan(caller, browse_request))


@router.get("/entries/all")
async def list_entries(
    category: Optional[str] = Query(default=None),
    caller: Caller = Depends(get_caller),
    facade: CatalogFacade = Depends(get_facade),
):
    return _reply(await facade.list_entries(caller, category))


@router.get("/search")
async def search(
    keyword: str = Query(default=""),
    caller: Caller = Depends(get_caller),
    facade: CatalogFacade = Depends(get_facade),
):
    return _reply(await facade.search(caller, keyword))


@router.get("/categories")
async def categories(
    caller: Caller = Depends(get_caller),
    facade: CatalogFacade = Depends(get_facade),
):
    return _reply(await facade.list_categories(caller))


@router.post("/entries")
async def add_entry(
    req: AddEntryRequest,
    caller: Caller = Depends(get_caller),
    facade: CatalogFacade = Depends(get_facade),
):
    return _reply(await facade.add(caller, req))


@router.patch("/entries/{entry_id}")
async def edit_entry(
    entry_id: str,
    req: EditEntryRequest,
    caller: Caller = Depends(get_caller),
    facade: CatalogFacade = Depends(get_facade),
):
    return _reply(await facade.edit(caller, entry_id, req))


@router.delete("/entries/{entry_id}")
async def delete_entry(
    entry_id: str,
    caller: Caller = Depends(get_caller),
    facade: CatalogFacade = Depends(get_facade),
):
    return _reply(await facade.delete(caller, entry_id))


@router.post("/entries/{entry_id}/toggle")
async def toggle_entry(
    entry_id: str,
    caller: Caller = Depends(get_caller),
    facade: CatalogFacade = Depends(get_facade),
):
    return _reply(await facade.toggle(caller, entry_id))


@router.put("/entries/{entry_id}/category")
async def recategorize_entry(
    entry_id: str,
    req: RecategorizeRequest,
    caller: Caller = Depends(get_caller),
    facade: CatalogFacade = Depends(get_facade),
):
    return _reply(await facade.recategorize(caller, entry_id, req))


@router.post("/suggestions")
async def suggest_entry(
    req: SuggestRequest,
    caller: Caller = Depends(get_caller),
    facade: CatalogFacade = Depends(get_facade),
):
    return _reply(await facade.suggest(caller, req))
