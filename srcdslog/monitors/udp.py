"""UDP log listener (logaddress_add) monitor implementation."""

import logging
import socket
import time
from typing import Optional, Tuple

from .base import Monitor, EventHandler

# Configuration Constants
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9999
RECV_BUFFER_SIZE = 4096
RECV_TIMEOUT = 0.5
RETRY_DELAY = 1.0


class UdpListenerError(Exception):
    """Exception raised when the listening socket cannot be used."""

    pass


class UdpListener:
    """Owns the datagram socket the server sends its log lines to."""

    def __init__(self, host: str, port: int, timeout: float = RECV_TIMEOUT):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.sock: Optional[socket.socket] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    def open(self) -> None:
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            sock.settimeout(self.timeout)
            sock.bind((self.host, self.port))
        except OSError as e:
            raise UdpListenerError(f"Could not bind to {self.host}:{self.port}: {e}")
        self.sock = sock
        self.logger.info(f"Listening on {self.host}:{self.port}")

    def receive(self) -> Optional[Tuple[bytes, str]]:
        """Wait for one datagram. Returns None on timeout."""
        if self.sock is None:
            raise UdpListenerError("Listener is not open")
        try:
            data, (addr, port) = self.sock.recvfrom(RECV_BUFFER_SIZE)
        except socket.timeout:
            return None
        except OSError as e:
            raise UdpListenerError(f"Error receiving datagram: {e}")
        return data, f"{addr}:{port}"

    def close(self) -> None:
        if self.sock is not None:
            self.sock.close()
            self.sock = None


class UdpMonitor(Monitor):
    """Receives log lines sent by a server over UDP, one line per datagram."""

    def __init__(
        self,
        name: str,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        poll_interval: float = RETRY_DELAY,
        secret: Optional[str] = None,
        handler: Optional[EventHandler] = None,
    ):
        super().__init__(name, poll_interval, secret, handler)
        self.listener = UdpListener(host, int(port))

    def poll_logs(self) -> None:
        """Receive datagrams until stopped."""
        self.listener.open()
        try:
            while self._running:
                try:
                    received = self.listener.receive()
                except UdpListenerError as e:
                    self.logger.error(str(e))
                    time.sleep(self.poll_interval)
                    continue

                if received is None:
                    continue

                data, source = received
                self.handle_line(data, source)
        finally:
            self.listener.close()
