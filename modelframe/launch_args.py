import logging
import sys
from pathlib import PurePath
from typing import FrozenSet, Optional, Sequence

logger = logging.getLogger(__name__)

#: Extensions (lower-case, without dot) the viewer accepts as launch files.
SUPPORTED_MODEL_EXTENSIONS: FrozenSet[str] = frozenset({"stl", "3mf"})


def is_supported_model_path(path: str) -> bool:
    """
    Check whether ``path`` names a supported model file.

    Only the extension is inspected, case-insensitively. The file does
    not have to exist.

    :param path: Candidate path as passed on the command line.
    :return: ``True`` for ``.stl`` / ``.3mf`` paths in any case.
    """
    suffix = PurePath(path).suffix
    if not suffix:
        return False
    return suffix[1:].lower() in SUPPORTED_MODEL_EXTENSIONS


def startup_file_from_args(argv: Optional[Sequence[str]] = None) -> Optional[str]:
    """
    Find the model file the application was launched with.

    The OS passes the file as an argument when the user opens a model
    with this application (double-click, "Open with", drag onto the icon).

    :param argv: Arguments excluding the program name.
        Defaults to ``sys.argv[1:]``.
    :return: The first supported model path in original order, or ``None``.
    """
    if argv is None:
        argv = sys.argv[1:]

    found = next((arg for arg in argv if is_supported_model_path(arg)), None)
    logger.debug("Startup file from %d launch argument(s): %r", len(argv), found)
    return found
