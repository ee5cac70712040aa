"""Monitor implementations for different log sources."""

from .base import Monitor
from .file import FileMonitor
from .udp import UdpMonitor

# Dictionary of available monitor types
MONITOR_TYPES = {
    "FileMonitor": FileMonitor,
    "UdpMonitor": UdpMonitor,
}

__all__ = ["Monitor", "FileMonitor", "UdpMonitor", "MONITOR_TYPES"]
