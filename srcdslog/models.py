"""Data models for the events carried by server log lines."""

from dataclasses import dataclass
from ipaddress import IPv4Address


@dataclass(frozen=True)
class PlayerIdentity:
    """A player as written in log lines: "name<uid><steamid><team>"."""

    name: str
    uid: int
    steamid: str
    team: str


@dataclass(frozen=True)
class Event:
    """Base class for every classified message body."""

    @property
    def is_unrecognized(self) -> bool:
        return isinstance(self, Unrecognized)


@dataclass(frozen=True)
class ServerLogStarted(Event):
    file: str
    game: str
    version: str


@dataclass(frozen=True)
class ServerLogClosed(Event):
    pass


@dataclass(frozen=True)
class ServerCvarsStart(Event):
    pass


@dataclass(frozen=True)
class ServerCvarsEnd(Event):
    pass


@dataclass(frozen=True)
class ServerCvar(Event):
    name: str
    value: str


@dataclass(frozen=True)
class MapLoading(Event):
    name: str


@dataclass(frozen=True)
class MapStarted(Event):
    name: str
    checksum: str


@dataclass(frozen=True)
class RemoteConsoleCommand(Event):
    address: IPv4Address
    port: int
    command: str


@dataclass(frozen=True)
class ChatMessage(Event):
    sender: PlayerIdentity
    text: str
    team_only: bool


@dataclass(frozen=True)
class PlayerConnected(Event):
    player: PlayerIdentity
    address: IPv4Address
    port: int


@dataclass(frozen=True)
class PlayerDisconnected(Event):
    player: PlayerIdentity
    reason: str


@dataclass(frozen=True)
class PlayerJoinedTeam(Event):
    player: PlayerIdentity
    team: str


@dataclass(frozen=True)
class PlayerVsPlayerAction(Event):
    """One player triggering a named action against another (domination, revenge, ...)."""

    actor: PlayerIdentity
    action: str
    target: PlayerIdentity


@dataclass(frozen=True)
class Unrecognized(Event):
    """Message body with no known shape. Carries no data."""

    pass
