"""Filtering and cursor pagination for the server listing endpoint.

Cursors are the base64 encoding of the decimal offset into the *filtered*
sequence. They carry no information about the filter that produced them, so a
cursor reused with different filters simply points at that offset in the new
result set.

Query values are never rejected here: an unusable ``limit`` falls back to the
default page size and a cursor that cannot be decoded restarts the listing at
offset 0. This keeps the listing endpoint free of client errors.
"""
import base64
import binascii
import logging
import re
from typing import Generic, NamedTuple, Optional, Sequence, TypeVar

from .model import McpServer

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 100

_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")

T = TypeVar("T")


class Page(NamedTuple, Generic[T]):
    items: list[T]
    total: int
    limit: int
    cursor: Optional[str]


def parse_tags(raw: Optional[str]) -> set[str]:
    """Splits a comma separated tag list into lower-cased, non-empty tags."""
    if not raw:
        return set()
    return {tag.strip().lower() for tag in raw.split(",") if tag.strip()}


def filter_servers(servers: Sequence[McpServer], tags: Optional[set[str]] = None,
                   capability: Optional[str] = None) -> list[McpServer]:
    """Narrows the catalog by tag and capability, keeping catalog order.

    A server passes the tag filter when any of its tags equals any requested tag
    (case-insensitive). It passes the capability filter when any of its
    capabilities contains the requested text (case-insensitive). When both
    filters are given a server has to pass both.

    Args:
        servers: The catalog in canonical order.
        tags: Requested tags, or None/empty for no tag filter.
        capability: Capability substring, or None/empty for no capability filter.

    Returns:
        The matching servers in their original relative order.
    """
    wanted_tags = {tag.lower() for tag in tags} if tags else set()
    needle = capability.lower() if capability else ""

    result = []
    for server in servers:
        if wanted_tags and not any(tag.lower() in wanted_tags for tag in server.tags):
            continue
        if needle and not any(needle in cap.lower() for cap in server.capabilities):
            continue
        result.append(server)
    return result


def normalize_limit(raw: int | str | None) -> int:
    """Turns a requested page size into one within [1, MAX_LIMIT]."""
    value: Optional[int] = None
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if match:
            sign, digits = match.group(1), match.group(2).lstrip("0") or "0"
            if len(digits) > len(str(MAX_LIMIT)):
                # too large to matter, skip converting arbitrarily long digit runs
                value = -1 if sign == "-" else MAX_LIMIT
            else:
                value = int(sign + digits)
    if value is None or value <= 0:
        value = DEFAULT_LIMIT
    return max(1, min(value, MAX_LIMIT))


def encode_cursor(offset: int) -> str:
    if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
        raise ValueError(f"Cursor offset must be a non-negative integer, got {offset!r}")
    return base64.b64encode(str(offset).encode("ascii")).decode("ascii")


def decode_cursor(cursor: str) -> Optional[int]:
    """Decodes a cursor back to its offset.

    Returns:
        The offset, or None if the cursor is not a valid encoded offset.
    """
    try:
        payload = base64.b64decode(cursor.encode("ascii"), validate=True).decode("ascii")
    except (binascii.Error, UnicodeError, ValueError):
        return None
    if not payload.isdigit():
        return None
    try:
        return int(payload)
    except ValueError:
        # longer than the interpreter will convert
        return None


def paginate(items: Sequence[T], limit: int | str | None = None,
             cursor: Optional[str] = None) -> Page[T]:
    """Slices one page out of an already filtered sequence.

    Args:
        items: The filtered sequence.
        limit: Requested page size, normalized with normalize_limit.
        cursor: Cursor from a previous page, or None to start at the beginning.

    Returns:
        The page, the filtered total, the effective limit and the cursor of the
        next page (None when no records remain).
    """
    page_size = normalize_limit(limit)
    total = len(items)

    offset = 0
    if cursor:
        decoded = decode_cursor(cursor)
        if decoded is None:
            logger.debug(f"Ignoring malformed cursor {cursor!r}, restarting at offset 0")
        else:
            offset = decoded

    next_offset = offset + page_size
    next_cursor = encode_cursor(next_offset) if next_offset < total else None
    return Page(items=list(items[offset:next_offset]), total=total, limit=page_size, cursor=next_cursor)
