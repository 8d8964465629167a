"""
Container models for rexec SDK.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContainerStatus(str, Enum):
    """Container lifecycle status."""

    RUNNING = "running"
    STOPPED = "stopped"
    CREATING = "creating"
    ERROR = "error"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> ContainerStatus:
        """Map a raw status string to the enum, falling back to UNKNOWN."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.UNKNOWN


class Container(BaseModel):
    """
    Snapshot of a remote container.

    Returned fresh by every REST call; the SDK keeps no local copy.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    image: str
    status: str
    created_at: str
    started_at: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    environment: dict[str, str] = Field(default_factory=dict)

    @property
    def state(self) -> ContainerStatus:
        """Parsed status."""
        return ContainerStatus.parse(self.status)

    @property
    def is_running(self) -> bool:
        return self.state == ContainerStatus.RUNNING


class CreateContainerRequest(BaseModel):
    """Request body for creating a container."""

    image: str = Field(min_length=1)
    name: str | None = None
    environment: dict[str, str] = Field(default_factory=dict)
    labels: dict[str, str] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """JSON body: name omitted when unset, empty maps omitted."""
        payload: dict[str, Any] = {"image": self.image}
        if self.name is not None:
            payload["name"] = self.name
        if self.environment:
            payload["environment"] = dict(self.environment)
        if self.labels:
            payload["labels"] = dict(self.labels)
        return payload
