"""
Base class for rexec services.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from rexec.exceptions import SerializationError

if TYPE_CHECKING:
    from rexec.transport.remote import RemoteTransport

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseService:
    """
    Base for all service namespaces.

    Services are stateless request builders over a shared transport.
    """

    def __init__(self, transport: RemoteTransport) -> None:
        self._transport = transport

    @property
    def transport(self) -> RemoteTransport:
        return self._transport


def require_id(value: str, name: str = "container_id") -> str:
    """Reject empty identifiers before they reach a URL."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")
    return value


def parse_model(model: type[ModelT], data: Any) -> ModelT:
    """Validate a JSON object into a model."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise SerializationError(f"Invalid {model.__name__} payload: {e}", cause=e) from e


def parse_list(model: type[ModelT], data: Any) -> list[ModelT]:
    """Validate a JSON array into a list of models. null is an empty list."""
    if data is None:
        return []
    try:
        return TypeAdapter(list[model]).validate_python(data)  # type: ignore[valid-type]
    except ValidationError as e:
        raise SerializationError(
            f"Invalid {model.__name__} list payload: {e}", cause=e
        ) from e
