# menu_manager/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .auth import Authorizer, any_of, authority_at_least, has_capability
from .catalog.renderer import HttpRenderer
from .catalog.router import router as menu_router
from .catalog.service import CatalogFacade, Renderer, SuggestionSink
from .catalog.store import EntryStore
from .config import Settings, get_settings
from .notifications import LoggingSuggestionSink


logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=settings.log_format)


def default_authorizer(settings: Settings) -> Authorizer:
    # the authority level only counts when a threshold is configured
    if settings.admin_authority is None:
        return has_capability
    return any_of(authority_at_least(settings.admin_authority), has_capability)


def create_app(
    settings: Optional[Settings] = None,
    authorizer: Optional[Authorizer] = None,
    renderer: Optional[Renderer] = None,
    suggestion_sink: Optional[SuggestionSink] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    facade = CatalogFacade(
        store=EntryStore(),
        settings=settings,
        authorizer=authorizer or default_authorizer(settings),
        renderer=renderer or HttpRenderer(settings.render_service_url, settings.render_timeout),
        suggestion_sink=suggestion_sink or LoggingSuggestionSink(),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        facade.store.seed(settings.default_items)
        yield
        facade.shutdown()

    app = FastAPI(
        title="Menu Manager",
        description="Catalog of chat menu entries: browse, search and admin commands.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.facade = facade
    app.include_router(menu_router)

    # 🔹 Health check
    @app.get("/")
    def health_check():
        return {"status": "ok", "entries": len(facade.store)}

    return app

