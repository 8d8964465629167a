"""
Transport layer for rexec SDK.
"""

from rexec.transport.base import BaseTransport, TransportState, websocket_url
from rexec.transport.remote import RemoteTransport

__all__ = [
    "BaseTransport",
    "RemoteTransport",
    "TransportState",
    "websocket_url",
]
