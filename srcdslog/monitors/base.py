"""Base abstract class for all log monitors."""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..frame import DecodedLine, FrameError
from ..models import Event
from ..utils import describe_event

EventHandler = Callable[[DecodedLine, Event, str], None]


class Monitor(ABC):
    """Base abstract class for all log monitors.

    Subclasses read raw lines from a source and pass each one to
    ``handle_line``, which decodes it and forwards the result to the handler.
    """

    def __init__(
        self,
        name: str,
        poll_interval: float = 5,
        secret: Optional[str] = None,
        handler: Optional[EventHandler] = None,
    ):
        self.name = name
        self.safe_name = name.replace(" ", "_")
        self.poll_interval = poll_interval
        self.secret = secret
        self.handler = handler or self.log_event
        self._running = False
        self.logger = logging.getLogger(f"{self.__class__.__name__}.{self.name}")

    @abstractmethod
    def poll_logs(self) -> None:
        """Read lines until stopped (implemented by subclasses)."""
        pass

    def start(self) -> None:
        """Start the monitoring process."""
        self._running = True
        self.logger.info(f"Starting monitor '{self.name}'")
        try:
            self.poll_logs()
        except Exception as e:
            self.logger.error(f"Error in monitor {self.name}: {e}", exc_info=True)
        finally:
            self._running = False

    def stop(self) -> None:
        """Stop the monitoring process."""
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def handle_line(self, data: bytes, source: str) -> Optional[Event]:
        """Decode one raw line and pass it to the handler.

        Returns the classified event, or None if the line was dropped.
        """
        try:
            line = DecodedLine.from_bytes(data)
        except FrameError as e:
            self.logger.warning(
                f"Could not parse line from {source} with len {len(data)}: {e}"
            )
            return None

        if self.secret is not None and line.secret != self.secret:
            self.logger.debug(f"Dropping line from {source}: secret mismatch")
            return None

        event = line.classify()
        try:
            self.handler(line, event, source)
        except Exception as e:
            self.logger.error(f"Event handler failed for {source}: {e}", exc_info=True)
        return event

    def log_event(self, line: DecodedLine, event: Event, source: str) -> None:
        """Default handler: write the decoded event to the log."""
        if event.is_unrecognized:
            self.logger.debug(f"[{line.timestamp}] {source}: {line.message_body}")
        else:
            self.logger.info(f"[{line.timestamp}] {source}: {describe_event(event)}")
