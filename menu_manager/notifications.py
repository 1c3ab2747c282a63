"""Sinks that receive user suggestions for new menu entries."""

from __future__ import annotations

import logging
from typing import List

from .models import Suggestion


logger = logging.getLogger(__name__)


class LoggingSuggestionSink:
    """Write each suggestion to the application log for admins to review."""

    def submit(self, suggestion: Suggestion) -> None:
        logger.info(
            "User suggestion from %s: name=%r command=%r description=%r at %s",
            suggestion.user_id,
            suggestion.name,
            suggestion.command,
            suggestion.description,
            suggestion.timestamp.isoformat(),
        )


class InMemorySuggestionSink:
    """Keep suggestions in a list, e.g. for an admin inbox endpoint or tests."""

    def __init__(self) -> None:
        self.suggestions: List[Suggestion] = []

    def submit(self, suggestion: Suggestion) -> None:
        self.suggestions.append(suggestion)
