"""
Files service for rexec SDK.

Provides file system operations inside a container: list, download,
mkdir, delete.
"""

from __future__ import annotations

from pathlib import Path

from rexec.logging import get_logger
from rexec.models.files import FileInfo
from rexec.services.base import BaseService, parse_list, require_id

logger = get_logger(__name__)


def _files_path(container_id: str, suffix: str = "") -> str:
    return f"/api/containers/{container_id}/files{suffix}"


class FilesService(BaseService):
    """
    File operations inside a container.

    Paths are sent as the urlencoded "path" query parameter.

    Example:
        >>> entries = await client.files.list("abc123", "/home/user")
        >>> data = await client.files.download("abc123", "/etc/hostname")
    """

    async def list(self, container_id: str, path: str = "/") -> list[FileInfo]:
        """
        List directory contents.

        Args:
            container_id: Container ID.
            path: Directory path inside the container.

        Returns:
            Entries of the directory.
        """
        require_id(container_id)
        data = await self._transport.request(
            "GET", _files_path(container_id, "/list"), params={"path": path}
        )
        return parse_list(FileInfo, data)

    async def download(self, container_id: str, path: str) -> bytes:
        """
        Download a file.

        Args:
            container_id: Container ID.
            path: File path inside the container.

        Returns:
            Raw file contents.
        """
        require_id(container_id)
        return await self._transport.request_bytes(
            "GET", _files_path(container_id), params={"path": path}
        )

    async def save(
        self,
        container_id: str,
        path: str,
        local_path: str | Path | None = None,
    ) -> Path:
        """
        Download a file and write it locally.

        Args:
            container_id: Container ID.
            path: File path inside the container.
            local_path: Destination, defaults to the remote file name in the
                current directory.

        Returns:
            Path of the written file.
        """
        data = await self.download(container_id, path)
        target = Path(local_path) if local_path else Path(Path(path).name or "download")
        target.write_bytes(data)
        logger.debug("Saved %s:%s to %s (%d bytes)", container_id, path, target, len(data))
        return target

    async def mkdir(self, container_id: str, path: str) -> None:
        """Create a directory."""
        require_id(container_id)
        await self._transport.request_empty(
            "POST", _files_path(container_id, "/mkdir"), json={"path": path}
        )

    async def delete(self, container_id: str, path: str) -> None:
        """Delete a file or directory."""
        require_id(container_id)
        await self._transport.request_empty(
            "DELETE", _files_path(container_id), params={"path": path}
        )
