import logging
from pathlib import Path
from typing import Optional

from .errors import IoFailure
from .pending import PendingFile
from .pyinvoke import CommandRegistry

logger = logging.getLogger(__name__)


def greet(name: str) -> str:
    """Return a greeting for ``name``. The name is not escaped."""
    return f"Hello, {name}! You've been greeted from Python!"


def read_file_bytes(path: str) -> bytes:
    """
    Read a whole file into memory.

    :param path: File path supplied by the UI.
    :return: The complete file contents.
    :raises IoFailure: If the file cannot be read (missing, directory,
        permission denied, ...).
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        logger.warning("read_file_bytes failed for %r: %s", path, e)
        raise IoFailure(path, e.strerror or str(e)) from e
    except ValueError as e:
        # embedded NUL bytes are rejected before the OS is asked
        logger.warning("read_file_bytes rejected %r: %s", path, e)
        raise IoFailure(path, str(e)) from e


def consume_pending_file(pending: PendingFile) -> Optional[str]:
    """
    Hand the startup file path to the UI.

    :param pending: Managed cell, injected by the registry.
    :return: The path on the first call, ``None`` afterwards.
    """
    return pending.take()


def register_commands(registry: CommandRegistry) -> CommandRegistry:
    """Register the UI-facing commands on ``registry``."""
    for func in (greet, read_file_bytes, consume_pending_file):
        registry.command(func)
    return registry
