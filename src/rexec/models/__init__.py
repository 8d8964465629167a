"""
Pydantic models for rexec SDK.
"""

from rexec.models.containers import (
    Container,
    ContainerStatus,
    CreateContainerRequest,
)
from rexec.models.files import FileInfo
from rexec.models.terminal import ResizeMessage, encode_resize

__all__ = [
    "Container",
    "ContainerStatus",
    "CreateContainerRequest",
    "FileInfo",
    "ResizeMessage",
    "encode_resize",
]
