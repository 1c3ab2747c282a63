import pytest

from menu_manager.catalog.service import CatalogFacade
from menu_manager.catalog.store import EntryStore
from menu_manager.config import DEFAULT_ITEMS, Settings
from menu_manager.models import Caller
from menu_manager.notifications import InMemorySuggestionSink


def capability_authorizer(caller, capability):
    return capability in caller.capabilities


class FakeRenderer:
    def __init__(self, image=b"\x89PNG fake", error=None):
        self.image = image
        self.error = error
        self.calls = []

    def render(self, markup, width, height):
        self.calls.append((markup, width, height))
        if self.error is not None:
            raise self.error
        return self.image


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def store():
    s = EntryStore()
    s.seed(DEFAULT_ITEMS)
    return s


@pytest.fixture
def sink():
    return InMemorySuggestionSink()


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def facade(store, settings, renderer, sink):
    return CatalogFacade(
        store=store,
        settings=settings,
        authorizer=capability_authorizer,
        renderer=renderer,
        suggestion_sink=sink,
    )


@pytest.fixture
def admin():
    return Caller(user_id="admin-1", capabilities=["menu.admin"])


@pytest.fixture
def user():
    return Caller(user_id="user-1")


@pytest.fixture
def make_facade(store, settings, sink):
    def _make(settings_override=None, renderer=None, authorizer=capability_authorizer):
        return CatalogFacade(
            store=store,
            settings=settings_override or settings,
            authorizer=authorizer,
            renderer=renderer,
            suggestion_sink=sink,
        )

    return _make


@pytest.fixture
def fake_renderer_cls():
    return FakeRenderer
