"""Identifier generation for new menu entries."""

from __future__ import annotations

import re
import string
import time
from typing import Optional

# Characters kept in a slug: ASCII lowercase, digits and CJK unified ideographs.
_DISALLOWED = re.compile(r"[^a-z0-9一-龥]")
_SEPARATORS = re.compile(r"-+")
_BASE36 = string.digits + string.ascii_lowercase


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base-36 encoding needs a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def slugify(name: str) -> str:
    slug = _DISALLOWED.sub("-", name.lower())
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")


def generate_id(name: str, now_ns: Optional[int] = None) -> str:
    """Derive an entry id from a display name.

    The slug is followed by the current time in microseconds, base-36
    encoded. This makes collisions unlikely but cannot rule them out;
    ``EntryStore.create`` remains the authority on uniqueness.
    """
    if now_ns is None:
        now_ns = time.time_ns()
    suffix = to_base36(now_ns // 1000)
    slug = slugify(name)
    return f"{slug}-{suffix}" if slug else suffix
