from __future__ import annotations

from machineid.errors import (
    CommandExecutionError,
    MachineIdError,
    ParseError,
    UnsupportedPlatformError,
)
from machineid.service import MachineIdService

__all__ = [
    "CommandExecutionError",
    "MachineIdError",
    "MachineIdService",
    "ParseError",
    "UnsupportedPlatformError",
    "machine_id",
    "machine_id_sync",
]

__version__ = "1.0.0"


def machine_id_sync(original: bool) -> str:
    """Return the host identifier, raw when ``original`` is true, else its SHA-256 hex digest.

    Blocks until the platform command exits.
    """
    return MachineIdService().get_sync(original)


async def machine_id(original: bool) -> str:
    """Awaitable counterpart of :func:`machine_id_sync`."""
    return await MachineIdService().get(original)
