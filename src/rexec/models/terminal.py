"""
Terminal control-message models for rexec SDK.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rexec.exceptions import SerializationError

U16_MAX = 65535


class ResizeMessage(BaseModel):
    """
    Viewport resize control message.

    Sent as a JSON text frame over the terminal WebSocket. Field order is
    part of the wire format: type, cols, rows.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["resize"] = "resize"
    cols: int = Field(ge=0, le=U16_MAX)
    rows: int = Field(ge=0, le=U16_MAX)

    def to_json(self) -> str:
        """Compact JSON text, e.g. {"type":"resize","cols":80,"rows":24}."""
        return self.model_dump_json()


def encode_resize(cols: int, rows: int) -> str:
    """
    Build and serialize a resize message.

    Raises:
        SerializationError: If cols/rows do not fit an unsigned 16-bit value.
    """
    try:
        return ResizeMessage(cols=cols, rows=rows).to_json()
    except ValidationError as e:
        raise SerializationError(
            f"Invalid resize dimensions {cols}x{rows}", cause=e
        ) from e
