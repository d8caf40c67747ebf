"""Exceptions raised across the command boundary.

The command registry turns any of these into an error reply whose text
is ``str(exc)``. Callers get a human-readable message, no error codes.
"""


class ModelFrameError(Exception):
    """Base exception for modelframe errors."""


class IoFailure(ModelFrameError):
    """Raised when a file requested by the UI cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to read '{path}': {reason}")
        self.path = path
        self.reason = reason
