"""
Authorization predicates.

The catalog only ever asks one question: "may this caller use
capability X?". A predicate answers it, synchronously or as a
coroutine. The strategies below cover the common deployments and can
be combined with ``any_of()``; anything more elaborate (an external
policy engine, a role database) just needs to be another predicate.
"""

from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Union

from .models import Caller


logger = logging.getLogger(__name__)

Authorizer = Callable[[Caller, str], Union[bool, Awaitable[bool]]]


def authority_at_least(level: int) -> Authorizer:
    """Approve any capability for callers at or above ``level``."""

    def _check(caller: Caller, capability: str) -> bool:
        return caller.authority >= level

    return _check


def has_capability(caller: Caller, capability: str) -> bool:
    """Approve capabilities explicitly granted to the caller."""
    return capability in caller.capabilities


async def resolve(authorizer: Authorizer, caller: Caller, capability: str) -> bool:
    """Run ``authorizer``, awaiting it if needed.

    Any exception raised by the predicate counts as a refusal.
    """
    try:
        verdict = authorizer(caller, capability)
        if inspect.isawaitable(verdict):
            verdict = await verdict
    except Exception:
        logger.exception(
            "Authorization check for %s on %r failed; treating as denied",
            caller.user_id, capability,
        )
        return False
    return bool(verdict)


def any_of(*authorizers: Authorizer) -> Authorizer:
    """Approve when at least one of ``authorizers`` approves."""

    async def _check(caller: Caller, capability: str) -> bool:
        for authorizer in authorizers:
            if await resolve(authorizer, caller, capability):
                return True
        return False

    return _check
