"""Primitive extractors shared by the message parsers.

Every extractor takes the remaining text of a message body and returns a
``(value, rest)`` tuple on success, or ``None`` if the text does not start
with the expected field.
"""

import re
from ipaddress import IPv4Address
from typing import Optional, Tuple

from .models import PlayerIdentity

MAX_UID = 0xFFFFFFFF
MAX_PORT = 0xFFFF

QUOTED_PATTERN = re.compile(r'"([^"]+)"')
PLAYER_PATTERN = re.compile(
    r'"(?P<name>[^<]*)<(?P<uid>[0-9]+)><(?P<steamid>\[U:[0-9]+:[0-9]+\])><(?P<team>\w*)>"'
)
ADDRESS_PATTERN = re.compile(
    r"(?P<a>\d+)\.(?P<b>\d+)\.(?P<c>\d+)\.(?P<d>\d+)(?::(?P<port>\d+))?", re.ASCII
)
KV_PATTERN = re.compile(r'\((?P<key>[^ ]*) (?:"(?P<quoted>[^"]*)"|(?P<bare>[^")]*))\)')


def quoted(text: str) -> Optional[Tuple[str, str]]:
    """Extract a non-empty double-quoted string."""
    match = QUOTED_PATTERN.match(text)
    if not match:
        return None
    return match.group(1), text[match.end():]


def player(text: str) -> Optional[Tuple[PlayerIdentity, str]]:
    """Extract a quoted player identity such as "Name<6><[U:1:123]><Red>"."""
    match = PLAYER_PATTERN.match(text)
    if not match:
        return None

    uid = int(match.group("uid"))
    if uid > MAX_UID:
        return None

    identity = PlayerIdentity(
        name=match.group("name"),
        uid=uid,
        steamid=match.group("steamid"),
        team=match.group("team"),
    )
    return identity, text[match.end():]


def address(
    text: str, require_port: bool = False
) -> Optional[Tuple[Tuple[IPv4Address, Optional[int]], str]]:
    """
    Extract a dotted-quad IPv4 address with an optional ":port" suffix.

    Args:
        text: Remaining message text
        require_port: Fail if the address has no port

    Returns:
        ((address, port or None), rest) or None
    """
    match = ADDRESS_PATTERN.match(text)
    if not match:
        return None

    octets = [int(match.group(k)) for k in "abcd"]
    if any(o > 255 for o in octets):
        return None

    port = match.group("port")
    if port is None:
        if require_port:
            return None
    else:
        port = int(port)
        if port > MAX_PORT:
            return None

    ip = IPv4Address(".".join(str(o) for o in octets))
    return (ip, port), text[match.end():]


def quoted_address(text: str) -> Optional[Tuple[Tuple[IPv4Address, int], str]]:
    """Extract a quoted "a.b.c.d:port" pair; the port is mandatory."""
    if not text.startswith('"'):
        return None
    result = address(text[1:], require_port=True)
    if not result:
        return None
    value, rest = result
    if not rest.startswith('"'):
        return None
    return value, rest[1:]


def kv_pair(text: str) -> Optional[Tuple[Tuple[str, str], str]]:
    """Extract a parenthesized pair: (key "value") or (key value)."""
    match = KV_PATTERN.match(text)
    if not match:
        return None
    value = match.group("quoted")
    if value is None:
        value = match.group("bare")
    return (match.group("key"), value), text[match.end():]
