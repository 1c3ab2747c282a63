"""ASGI entry point: ``uvicorn menu_manager.asgi:app``."""

from .main import create_app


app = create_app()
