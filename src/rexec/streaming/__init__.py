"""
Terminal streaming for rexec SDK.
"""

from rexec.streaming.base import SessionMetrics, SessionState
from rexec.streaming.terminal import TerminalSession

__all__ = [
    "SessionMetrics",
    "SessionState",
    "TerminalSession",
]
