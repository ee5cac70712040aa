"""File-based log monitor implementation."""

import builtins
import os
import glob
import time
import logging
from typing import Optional, List, Iterator

from pygtail import Pygtail

from .base import Monitor, EventHandler
from ..utils import ensure_dir

# Configuration Constants
DEFAULT_POLL_INTERVAL = 5
LOG_FILE_PATTERNS = ["*.log"]

# Monkey-patch built-in open() to default to lossy UTF-8 for text files.
# Process-wide once imported: any text-mode open() without an explicit
# encoding decodes with errors="replace".
_original_open = builtins.open


def open_utf8(
    file,
    mode="r",
    buffering=-1,
    encoding=None,
    errors=None,
    newline=None,
    closefd=True,
    opener=None,
):
    if "b" not in mode and encoding is None:
        encoding = "utf-8"
        errors = errors or "replace"
    return _original_open(
        file, mode, buffering, encoding, errors, newline, closefd, opener
    )


builtins.open = open_utf8


class LogFileScanner:
    """Handles log file discovery and reading."""

    def __init__(self, folder: str, safe_name: str, offset_dir: Optional[str] = None):
        self.folder = folder
        self.safe_name = safe_name
        self.offset_dir = offset_dir
        self.logger = logging.getLogger(self.__class__.__name__)
        if self.offset_dir:
            ensure_dir(self.offset_dir)

    def find_log_files(self) -> List[str]:
        """Find all server log files in the configured folder, oldest first."""
        log_files = []
        for pattern in LOG_FILE_PATTERNS:
            files = glob.glob(os.path.join(self.folder, pattern))
            log_files.extend(files)
        return sorted(log_files)

    def get_offset_path(self, file_path: str) -> Optional[str]:
        """Generate offset file path for a given log file."""
        if not self.offset_dir:
            return None

        log_filename = os.path.basename(file_path)
        return os.path.join(self.offset_dir, f"{self.safe_name}_{log_filename}.offset")

    def read_new_lines(self, file_path: str, offset_path: Optional[str]) -> Iterator[str]:
        """Read new lines from a file using Pygtail."""
        try:
            # a line still being written is left for the next poll
            return Pygtail(file_path, offset_file=offset_path, full_lines=True)
        except Exception as e:
            self.logger.error(f"Error reading file {os.path.basename(file_path)}: {e}")
            return iter([])


class FileMonitor(Monitor):
    """Tails the log files a server writes to its logs/ folder."""

    def __init__(
        self,
        name: str,
        folder: str,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        secret: Optional[str] = None,
        handler: Optional[EventHandler] = None,
        offset_dir: Optional[str] = None,
    ):
        super().__init__(name, poll_interval, secret, handler)
        self.scanner = LogFileScanner(folder, self.safe_name, offset_dir)

    def _process_file(self, file_path: str, offset_path: Optional[str]) -> int:
        """Process all new lines from a single file, returning how many were read."""
        count = 0
        source = os.path.basename(file_path)
        for line in self.scanner.read_new_lines(file_path, offset_path):
            if not self._running:
                break

            line = line.rstrip("\r\n")
            if not line:
                continue

            self.handle_line(line.encode("utf-8"), source)
            count += 1
        return count

    def poll_once(self) -> int:
        """Read every file once. Returns the number of lines handled."""
        total = 0
        for file_path in self.scanner.find_log_files():
            if not self._running:
                break

            offset_path = self.scanner.get_offset_path(file_path)
            total += self._process_file(file_path, offset_path)
        return total

    def poll_logs(self) -> None:
        """Poll log files and process new lines."""
        while self._running:
            try:
                self.poll_once()
            except Exception as e:
                self.logger.error(f"Error in file monitoring: {e}")

            time.sleep(self.poll_interval)
