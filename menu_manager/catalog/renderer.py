"""
Client for the screenshot service that rasterizes the image menu.

The service is a headless browser behind an HTTP endpoint: it accepts
a JSON payload with the HTML document and viewport size and answers
with PNG bytes. Only the Python standard library is used for the
request. Every failure is logged and raised as a ``RenderError``
subclass so the caller can degrade to an apology message; nothing
here touches catalog state.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Optional

from .errors import RendererUnavailable, RenderFailure


logger = logging.getLogger(__name__)


class HttpRenderer:
    def __init__(self, url: Optional[str], timeout: float = 15.0) -> None:
        self.url = url
        self.timeout = timeout

    def render(self, markup: str, width: int, height: int) -> bytes:
        """POST ``markup`` to the rendering service and return the image.

        Raises ``RendererUnavailable`` when no service URL is configured
        and ``RenderFailure`` on transport errors, non-200 answers or an
        empty body.
        """
        if not self.url:
            raise RendererUnavailable("no rendering service configured")
        payload = json.dumps(
            {
                "html": markup,
                "viewport": {"width": width, "height": height},
                "fullPage": True,
            },
            ensure_ascii=False,
        ).encode("utf-8")
        request = urllib.request.Request(
            self.url,
            data=payload,
            method="POST",
            headers={
                "Content-Type": "application/json; charset=utf-8",
                "Accept": "image/png",
            },
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                if response.status != 200:
                    logger.warning(
                        "Render request to %s returned status %s", self.url, response.status
                    )
                    raise RenderFailure(f"rendering service answered {response.status}")
                image = response.read()
        except (urllib.error.URLError, OSError) as exc:
            logger.error("Error rendering menu image via %s: %s", self.url, exc)
            raise RenderFailure(str(exc)) from exc
        if not image:
            raise RenderFailure("rendering service returned an empty image")
        return image
