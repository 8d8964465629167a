"""
File system models for rexec SDK.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FileInfo(BaseModel):
    """File or directory metadata inside a container."""

    model_config = ConfigDict(extra="ignore")

    name: str
    path: str
    size: int = 0
    mode: str = ""
    mod_time: str = ""
    is_dir: bool = False
