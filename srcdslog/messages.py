"""Message body grammar: one parser per event shape plus the dispatcher.

Reference: https://developer.valvesoftware.com/wiki/HL_Log_Standard
"""

import re
from typing import Callable, Optional, Tuple

from . import extractors
from .models import (
    ChatMessage,
    Event,
    MapLoading,
    MapStarted,
    PlayerConnected,
    PlayerDisconnected,
    PlayerJoinedTeam,
    PlayerVsPlayerAction,
    RemoteConsoleCommand,
    ServerCvar,
    ServerCvarsEnd,
    ServerCvarsStart,
    ServerLogClosed,
    ServerLogStarted,
    Unrecognized,
)

WHITESPACE_PATTERN = re.compile(r"\s+")
CVAR_PATTERNS = (
    re.compile(r'server_cvar: "(?P<name>[^"]+)" "(?P<value>[^"]*)"', re.IGNORECASE),
    re.compile(r'server cvar "(?P<name>[^"]+)" = "(?P<value>[^"]*)"', re.IGNORECASE),
    # unprefixed dump form; no '<' so a quoted player identity never matches
    re.compile(r'"(?P<name>[^"<]+)" = "(?P<value>[^"<]*)"'),
)


def _tag(text: str, phrase: str, ignore_case: bool = False) -> Optional[str]:
    """Consume a literal phrase from the start of text."""
    head = text[: len(phrase)]
    if ignore_case:
        matched = head.lower() == phrase.lower()
    else:
        matched = head == phrase
    return text[len(phrase):] if matched else None


def _whitespace(text: str) -> Optional[str]:
    match = WHITESPACE_PATTERN.match(text)
    return text[match.end():] if match else None


def log_file_started(text: str) -> Optional[Event]:
    rest = _tag(text, "Log file started ", ignore_case=True)
    if rest is None:
        return None

    values = []
    for i in range(3):
        if i:
            rest = _whitespace(rest)
            if rest is None:
                return None
        pair = extractors.kv_pair(rest)
        if not pair:
            return None
        (_, value), rest = pair
        values.append(value)

    file, game, version = values
    return ServerLogStarted(file=file, game=game, version=version)


def log_file_closed(text: str) -> Optional[Event]:
    if _tag(text, "Log file closed", ignore_case=True) is None:
        return None
    return ServerLogClosed()


def server_cvars_start(text: str) -> Optional[Event]:
    if _tag(text, "Server cvars start", ignore_case=True) is None:
        return None
    return ServerCvarsStart()


def server_cvars_end(text: str) -> Optional[Event]:
    if _tag(text, "Server cvars end", ignore_case=True) is None:
        return None
    return ServerCvarsEnd()


def server_cvar(text: str) -> Optional[Event]:
    for pattern in CVAR_PATTERNS:
        match = pattern.match(text)
        if match:
            return ServerCvar(name=match.group("name"), value=match.group("value"))
    return None


def loading_map(text: str) -> Optional[Event]:
    rest = _tag(text, "Loading map ", ignore_case=True)
    if rest is None:
        return None
    name = extractors.quoted(rest)
    if not name:
        return None
    return MapLoading(name=name[0])


def started_map(text: str) -> Optional[Event]:
    rest = _tag(text, "Started map ", ignore_case=True)
    if rest is None:
        return None
    name = extractors.quoted(rest)
    if not name:
        return None
    name, rest = name
    pair = extractors.kv_pair(rest.lstrip())
    if not pair:
        return None
    (_, checksum), _ = pair
    return MapStarted(name=name, checksum=checksum)


def rcon(text: str) -> Optional[Event]:
    rest = _tag(text, "rcon from ", ignore_case=True)
    if rest is None:
        return None
    source = extractors.quoted_address(rest)
    if not source:
        return None
    (address, port), rest = source
    rest = _tag(rest, ": command ")
    if rest is None:
        return None
    command = extractors.quoted(rest)
    if not command:
        return None
    return RemoteConsoleCommand(address=address, port=port, command=command[0])


def chat_message(text: str) -> Optional[Event]:
    sender = extractors.player(text)
    if not sender:
        return None
    sender, rest = sender

    team_only = False
    after = _tag(rest, " say ")
    if after is None:
        after = _tag(rest, " say_team ")
        team_only = True
    if after is None:
        return None

    message = extractors.quoted(after)
    if not message:
        return None
    return ChatMessage(sender=sender, text=message[0], team_only=team_only)


def connect_message(text: str) -> Optional[Event]:
    user = extractors.player(text)
    if not user:
        return None
    user, rest = user
    rest = _tag(rest, " connected, address ")
    if rest is None:
        return None
    source = extractors.quoted_address(rest)
    if not source:
        return None
    (address, port), _ = source
    return PlayerConnected(player=user, address=address, port=port)


def disconnect_message(text: str) -> Optional[Event]:
    user = extractors.player(text)
    if not user:
        return None
    user, rest = user
    rest = _tag(rest, " disconnected (reason ")
    if rest is None:
        return None
    reason = extractors.quoted(rest)
    if not reason or _tag(reason[1], ")") is None:
        return None
    return PlayerDisconnected(player=user, reason=reason[0])


def inter_player_action(text: str) -> Optional[Event]:
    actor = extractors.player(text)
    if not actor:
        return None
    actor, rest = actor
    rest = _tag(rest, " triggered ", ignore_case=True)
    if rest is None:
        return None
    action = extractors.quoted(rest)
    if not action:
        return None
    action, rest = action
    rest = _tag(rest, " against ", ignore_case=True)
    if rest is None:
        return None
    target = extractors.player(rest)
    if not target:
        return None
    return PlayerVsPlayerAction(actor=actor, action=action, target=target[0])


def join_team_message(text: str) -> Optional[Event]:
    user = extractors.player(text)
    if not user:
        return None
    user, rest = user
    rest = _tag(rest, " joined team ")
    if rest is None:
        return None
    team = extractors.quoted(rest)
    if not team:
        return None
    return PlayerJoinedTeam(player=user, team=team[0])


# Order matters: player shapes share the identity prefix, so the specific
# continuations are tried before "joined team".
MESSAGE_PARSERS: Tuple[Callable[[str], Optional[Event]], ...] = (
    log_file_started,
    log_file_closed,
    server_cvars_start,
    server_cvars_end,
    server_cvar,
    loading_map,
    started_map,
    rcon,
    chat_message,
    connect_message,
    disconnect_message,
    inter_player_action,
    join_team_message,
)


def classify(message_body: str) -> Event:
    """Classify a message body. Never raises; unknown shapes give Unrecognized."""
    for parser in MESSAGE_PARSERS:
        event = parser(message_body)
        if event is not None:
            return event
    return Unrecognized()
