"""
Native side of the model viewer shell.

Exports the main building blocks:
  * :func:`launch` → start the shell (webframe + command channel)
  * :func:`build_registry` → the wired command surface
  * :class:`CommandRegistry` → command registration and dispatch
  * :class:`PendingFile` → one-shot startup file hand-off
  * :class:`ShellConfig` → launcher settings
"""

from .commands import consume_pending_file, greet, read_file_bytes
from .config import ShellConfig
from .errors import IoFailure, ModelFrameError
from .launch_args import SUPPORTED_MODEL_EXTENSIONS, is_supported_model_path, startup_file_from_args
from .pending import PendingFile
from .pyinvoke import CommandRegistry
from .runtime import build_registry, launch

__all__ = [
    "CommandRegistry",
    "IoFailure",
    "ModelFrameError",
    "PendingFile",
    "ShellConfig",
    "SUPPORTED_MODEL_EXTENSIONS",
    "build_registry",
    "consume_pending_file",
    "greet",
    "is_supported_model_path",
    "launch",
    "read_file_bytes",
    "startup_file_from_args",
]
