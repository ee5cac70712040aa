"""Utility functions for log monitoring."""

import os


class DirectoryError(Exception):
    """Exception raised when directory operations fail."""

    pass


def ensure_dir(directory: str) -> None:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        directory: Path to the directory to create

    Raises:
        DirectoryError: If directory creation fails
    """
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise DirectoryError(f"Failed to create directory {directory}: {e}")


def describe_event(event) -> str:
    """Render an event as a single human-readable log message."""
    fields = ", ".join(f"{k}={v!s}" for k, v in vars(event).items())
    return f"{event.__class__.__name__}({fields})" if fields else event.__class__.__name__
