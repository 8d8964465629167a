"""
rexec services.
"""

from rexec.services.base import BaseService
from rexec.services.containers import ContainersService
from rexec.services.files import FilesService
from rexec.services.terminal import TerminalService

__all__ = [
    "BaseService",
    "ContainersService",
    "FilesService",
    "TerminalService",
]
