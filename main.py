"""Entry point for the server log listener (logcat)."""

from typing import List, Optional, Dict
import os
import time
import json
import logging
import threading
from srcdslog.monitors.base import Monitor
from srcdslog.monitors.file import FileMonitor
from srcdslog.monitors.udp import UdpMonitor
from srcdslog.utils import DirectoryError

# Configuration Constants
DEFAULT_CONFIG_PATH = "monitors.json"
DEFAULT_DATA_DIR = "data"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigurationError(Exception):
    """Custom exception for configuration-related errors."""

    pass


class ConfigManager:
    """Manages application configuration and monitor creation."""

    def __init__(self):
        self.config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)
        self.data_dir = os.environ.get("DATA_DIR", DEFAULT_DATA_DIR)
        self.pygtail_dir = os.path.join(self.data_dir, "pygtail")
        self.logger = logging.getLogger("srcdslog")

    def setup_logging(self, log_level: str = DEFAULT_LOG_LEVEL) -> None:
        """Configure application logging with file and console handlers."""
        numeric_level = getattr(logging, log_level.upper(), logging.INFO)
        log_file = os.path.join(self.data_dir, "logcat.log")
        handlers = [logging.StreamHandler()]

        try:
            handlers.append(logging.FileHandler(log_file))
        except OSError as e:
            self.logger.warning(f"Failed to setup file logging: {e}")

        logging.basicConfig(
            level=numeric_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=handlers,
        )

    def create_monitor(self, config: Dict) -> Monitor:
        """Create a monitor instance from configuration."""
        config_copy = config.copy()
        monitor_type = config_copy.pop("type", None)

        if not monitor_type:
            raise ConfigurationError("Missing monitor type in configuration")
        if "name" not in config_copy:
            raise ConfigurationError(f"Missing name for {monitor_type}")

        monitor_factories = {
            "FileMonitor": self._create_file_monitor,
            "UdpMonitor": self._create_udp_monitor,
        }

        factory = monitor_factories.get(monitor_type)
        if not factory:
            raise ConfigurationError(f"Unsupported monitor type: {monitor_type}")

        try:
            return factory(config_copy)
        except (TypeError, ValueError, DirectoryError) as e:
            raise ConfigurationError(f"Invalid {monitor_type} configuration: {e}")

    def _create_file_monitor(self, config: Dict) -> FileMonitor:
        """Create a FileMonitor instance."""
        if "folder" not in config:
            raise ConfigurationError("FileMonitor requires a 'folder'")
        config["offset_dir"] = self.pygtail_dir
        return FileMonitor(**config)

    def _create_udp_monitor(self, config: Dict) -> UdpMonitor:
        """Create a UdpMonitor instance."""
        return UdpMonitor(**config)

    def load_monitors(self) -> List[Monitor]:
        """Load and create monitors from configuration file."""
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                configs = json.load(f)
        except FileNotFoundError:
            raise ConfigurationError(
                f"Configuration file not found: {self.config_path}"
            )
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise ConfigurationError(
                f"Invalid JSON in configuration file: {self.config_path}"
            )

        if not isinstance(configs, list):
            raise ConfigurationError(
                f"Configuration must be a list of monitors: {self.config_path}"
            )

        monitors = []
        for config in configs:
            monitor = self.create_monitor(config)
            monitors.append(monitor)
            self.logger.debug(
                f"Created monitor: {monitor.__class__.__name__} for {monitor.name}"
            )
        return monitors


class MonitorManager:
    """Manages multiple monitor instances."""

    def __init__(self):
        self.monitors = []
        self.threads = []

    def add_monitor(self, monitor: Monitor) -> None:
        """Add a monitor to the manager."""
        self.monitors.append(monitor)

    def start_all(self) -> None:
        """Start all monitors in separate threads."""
        for monitor in self.monitors:
            thread = threading.Thread(target=monitor.start, daemon=True)
            thread.start()
            self.threads.append(thread)

    def stop_all(self) -> None:
        """Stop all monitors."""
        for monitor in self.monitors:
            monitor.stop()

    def wait_all(self, timeout: float = 1.0) -> None:
        """Wait for all monitor threads to complete with timeout."""
        end_time = time.time() + timeout
        for thread in self.threads:
            remaining = max(0, end_time - time.time())
            thread.join(timeout=remaining)


def main() -> None:
    """Main entry point for the application."""
    config_manager = ConfigManager()
    config_manager.setup_logging(os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL))
    logger = logging.getLogger("srcdslog")
    manager: Optional[MonitorManager] = None

    try:
        logger.info(f"Loading configuration from: {config_manager.config_path}")
        monitors = config_manager.load_monitors()

        if not monitors:
            logger.warning("No valid monitors configured.")
            return

        manager = MonitorManager()
        for monitor in monitors:
            manager.add_monitor(monitor)

        logger.info(f"Data directory: {config_manager.data_dir}")
        manager.start_all()

        while True:
            time.sleep(0.5)

    except KeyboardInterrupt:
        logger.info("Shutting down monitors...")
        if manager:
            manager.stop_all()
            manager.wait_all(timeout=1.0)
        logger.info("Shutdown complete.")
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")


if __name__ == "__main__":
    main()
