"""
Containers service for rexec SDK.

Provides container lifecycle management: list, get, create, delete,
start, stop.
"""

from __future__ import annotations

from rexec.models.containers import Container, CreateContainerRequest
from rexec.services.base import BaseService, parse_list, parse_model, require_id

CONTAINERS_PATH = "/api/containers"


class ContainersService(BaseService):
    """
    Container lifecycle service.

    Example:
        >>> async with RexecClient("https://rexec.example.com", token="tok") as client:
        ...     container = await client.containers.create(image="ubuntu:24.04")
        ...     await client.containers.start(container.id)
        ...     for c in await client.containers.list():
        ...         print(c.name, c.status)
    """

    async def list(self) -> list[Container]:
        """
        List all containers.

        Returns:
            Container snapshots.
        """
        data = await self._transport.request("GET", CONTAINERS_PATH)
        return parse_list(Container, data)

    async def get(self, container_id: str) -> Container:
        """
        Get a container by ID.

        Args:
            container_id: Container ID.

        Returns:
            Container snapshot.
        """
        require_id(container_id)
        data = await self._transport.request("GET", f"{CONTAINERS_PATH}/{container_id}")
        return parse_model(Container, data)

    async def create(
        self,
        image: str | CreateContainerRequest,
        name: str | None = None,
        environment: dict[str, str] | None = None,
        labels: dict[str, str] | None = None,
    ) -> Container:
        """
        Create a new container.

        Args:
            image: Image to run, or a prepared CreateContainerRequest.
            name: Optional container name.
            environment: Environment variables.
            labels: Container labels.

        Returns:
            Created container.
        """
        if isinstance(image, CreateContainerRequest):
            request = image
        else:
            request = CreateContainerRequest(
                image=image,
                name=name,
                environment=environment or {},
                labels=labels or {},
            )
        data = await self._transport.request(
            "POST", CONTAINERS_PATH, json=request.to_payload()
        )
        return parse_model(Container, data)

    async def delete(self, container_id: str) -> None:
        """Delete a container."""
        require_id(container_id)
        await self._transport.request_empty("DELETE", f"{CONTAINERS_PATH}/{container_id}")

    async def start(self, container_id: str) -> None:
        """Start a stopped container."""
        require_id(container_id)
        await self._transport.request_empty("POST", f"{CONTAINERS_PATH}/{container_id}/start")

    async def stop(self, container_id: str) -> None:
        """Stop a running container."""
        require_id(container_id)
        await self._transport.request_empty("POST", f"{CONTAINERS_PATH}/{container_id}/stop")
