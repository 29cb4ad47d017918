"""Logging interface used by the package's components."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Logger(Protocol):
    """Structured logger taking a message and alternating key/value pairs."""

    def debug(self, msg: str, *args: Any) -> None:
        """Log a debug message."""

    def info(self, msg: str, *args: Any) -> None:
        """Log an informational message."""

    def error(self, msg: str, *args: Any) -> None:
        """Log an error message."""