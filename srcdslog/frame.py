"""Framing decoder: strips the transport header and timestamp from a raw line."""

import datetime
import re
from dataclasses import dataclass
from typing import Optional

from .messages import classify
from .models import Event

# Lines received over UDP start with four 0xFF bytes
PACKET_HEADER = b"\xff\xff\xff\xff"
SECRET_BYTE = 0x53  # S
NO_SECRET_BYTE = 0x52  # R
LINE_MARKER = 0x4C  # L

TIMESTAMP_PATTERN = re.compile(
    r"(?P<month>\d{2})/(?P<day>\d{2})/(?P<year>\d{4}) - "
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2}): ",
    re.ASCII,
)


class FrameError(ValueError):
    """Base exception for lines that cannot be framed."""

    pass


class TooShort(FrameError):
    """Reserved: line shorter than any valid frame."""

    pass


class InvalidHeader(FrameError):
    """Reserved: header bytes present but malformed."""

    pass


class NoLineMarker(FrameError):
    """The buffer has no 'L' byte opening the line."""

    def __init__(self):
        super().__init__("No line marker found")


class BadSecretIndicator(FrameError):
    """The header's first byte is neither 'S' nor 'R'."""

    def __init__(self, byte: int):
        self.byte = byte
        super().__init__(f"Bad secret indicator byte: {byte:#04x}")

    def __eq__(self, other):
        return isinstance(other, BadSecretIndicator) and other.byte == self.byte

    def __hash__(self):
        return hash((BadSecretIndicator, self.byte))


class BadTimestamp(FrameError):
    """The text after the header does not start with a valid timestamp."""

    def __init__(self, text: str = ""):
        self.text = text
        super().__init__(f"Bad timestamp in line: {text[:32]!r}")


def _lossy(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _parse_secret(header: bytes) -> Optional[str]:
    """Return the secret carried by a non-empty header, or None for 'R'."""
    # cut off the UDP marker if anything follows it
    if len(header) > 4 and header[:4] == PACKET_HEADER:
        header = header[4:]

    indicator = header[0]
    if indicator == SECRET_BYTE:
        return _lossy(header[1:])
    if indicator == NO_SECRET_BYTE:
        return None
    raise BadSecretIndicator(indicator)


def parse_timestamp(text: str):
    """
    Parse the fixed-width timestamp at the start of a line.

    Args:
        text: Decoded text starting with "MM/DD/YYYY - HH:MM:SS: "

    Returns:
        Tuple of (datetime, remaining text)

    Raises:
        BadTimestamp: If the prefix is missing or names an impossible date
    """
    match = TIMESTAMP_PATTERN.match(text)
    if not match:
        raise BadTimestamp(text)

    try:
        timestamp = datetime.datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second")),
        )
    except ValueError:
        raise BadTimestamp(text)

    return timestamp, text[match.end():]


@dataclass(frozen=True)
class DecodedLine:
    """A single log line with its transport header and timestamp removed.

    Attributes:
        timestamp: Server-local time written at the start of the line
        message_body: Text following the timestamp, unmodified
        secret: The sv_logsecret value if the line arrived over UDP with one
    """

    timestamp: datetime.datetime
    message_body: str
    secret: Optional[str] = None

    @classmethod
    def from_bytes(cls, data: bytes) -> "DecodedLine":
        """
        Decode one raw log line.

        Args:
            data: Bytes of a single line, optionally prefixed by the UDP marker
                  and a secret header

        Returns:
            DecodedLine with timestamp, message body and optional secret

        Raises:
            NoLineMarker: If no 'L' byte is present
            BadSecretIndicator: If the header starts with an unknown byte
            BadTimestamp: If the timestamp prefix is missing or invalid
        """
        idx = data.find(bytes([LINE_MARKER]))
        if idx < 0:
            raise NoLineMarker()

        # the marker and the following space are both consumed
        header, rest = data[:idx], data[idx + 2:]
        secret = _parse_secret(header) if header else None

        timestamp, message_body = parse_timestamp(_lossy(rest))
        return cls(timestamp=timestamp, message_body=message_body, secret=secret)

    @classmethod
    def from_str(cls, text: str) -> "DecodedLine":
        return cls.from_bytes(text.encode("utf-8"))

    def classify(self) -> Event:
        """Classify the message body into an Event."""
        return classify(self.message_body)


def decode_frame(data: bytes) -> DecodedLine:
    """Decode one raw log line. Raises a FrameError subclass on malformed input."""
    return DecodedLine.from_bytes(data)
