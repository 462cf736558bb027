"""Output sinks receiving session notifications.

A sink gets free-text notifications, one call per line, without line
terminators. Standard-error lines carry a warning prefix and the session ends
with a single success or failure line. Sinks may be called from several
threads at once.
"""

import logging
import threading
from collections.abc import Callable
from typing import Protocol, TextIO


class OutputSink(Protocol):
    """Protocol for notification receivers."""

    def emit(self, text: str) -> None:
        """Deliver one notification."""
        ...


class CallbackSink:
    """Sink forwarding every notification to a callable."""

    def __init__(self, callback: Callable[[str], None]) -> None:
        """Initialize the sink."""
        self.callback = callback

    def emit(self, text: str) -> None:
        """Forward the notification."""
        self.callback(text)


class CollectingSink:
    """Sink keeping every notification in memory."""

    def __init__(self) -> None:
        """Initialize the sink."""
        self._lines: list[str] = []
        self._lock = threading.Lock()

    def emit(self, text: str) -> None:
        """Store the notification."""
        with self._lock:
            self._lines.append(text)

    @property
    def lines(self) -> list[str]:
        """Snapshot of the notifications received so far."""
        with self._lock:
            return list(self._lines)

    def clear(self) -> None:
        """Forget every stored notification."""
        with self._lock:
            self._lines.clear()


class StreamSink:
    """Sink writing notifications to a text stream, one per line."""

    def __init__(self, stream: TextIO) -> None:
        """Initialize the sink."""
        self.stream = stream
        self._lock = threading.Lock()

    def emit(self, text: str) -> None:
        """Write the notification and flush."""
        with self._lock:
            self.stream.write(f"{text}\n")
            self.stream.flush()


def safe_emit(sink: OutputSink, text: str, logger: logging.Logger) -> None:
    """Deliver ``text`` to ``sink``, logging instead of raising if the sink fails."""
    try:
        sink.emit(text)
    except Exception:  # noqa: BLE001
        logger.exception("Output sink failed to accept a notification")
