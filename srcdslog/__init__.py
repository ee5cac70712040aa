"""Decoder for Source dedicated server log lines."""

from .frame import (
    BadSecretIndicator,
    BadTimestamp,
    DecodedLine,
    FrameError,
    InvalidHeader,
    NoLineMarker,
    TooShort,
    decode_frame,
)
from .messages import classify
from .models import (
    ChatMessage,
    Event,
    MapLoading,
    MapStarted,
    PlayerConnected,
    PlayerDisconnected,
    PlayerIdentity,
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

__all__ = [
    "BadSecretIndicator",
    "BadTimestamp",
    "ChatMessage",
    "DecodedLine",
    "Event",
    "FrameError",
    "InvalidHeader",
    "MapLoading",
    "MapStarted",
    "NoLineMarker",
    "PlayerConnected",
    "PlayerDisconnected",
    "PlayerIdentity",
    "PlayerJoinedTeam",
    "PlayerVsPlayerAction",
    "RemoteConsoleCommand",
    "ServerCvar",
    "ServerCvarsEnd",
    "ServerCvarsStart",
    "ServerLogClosed",
    "ServerLogStarted",
    "TooShort",
    "Unrecognized",
    "classify",
    "decode_frame",
]
