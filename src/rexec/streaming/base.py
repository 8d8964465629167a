"""
Shared streaming types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SessionState(str, Enum):
    """Terminal session state. OPEN -> CLOSED only."""

    OPEN = "open"
    CLOSED = "closed"


@dataclass
class SessionMetrics:
    """Counters for a terminal session."""

    bytes_sent: int = 0
    bytes_received: int = 0
    frames_sent: int = 0
    frames_received: int = 0
    control_frames_skipped: int = 0
    errors: int = 0

    def record_sent(self, size: int) -> None:
        self.bytes_sent += size
        self.frames_sent += 1

    def record_received(self, size: int) -> None:
        self.bytes_received += size
        self.frames_received += 1

    def record_skipped(self) -> None:
        self.control_frames_skipped += 1

    def record_error(self) -> None:
        self.errors += 1
