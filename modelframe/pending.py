import logging
import threading
from typing import Optional, Sequence

from .launch_args import startup_file_from_args

logger = logging.getLogger(__name__)


class PendingFile:
    """
    One-shot holder for the startup file path.

    The path is captured before the UI command channel exists and handed
    to whichever caller asks first. After the first successful
    :meth:`take` the slot stays empty for the rest of the process.
    """

    def __init__(self, candidate: Optional[str] = None, lock_timeout: float = 5.0):
        self._lock = threading.Lock()
        self._value: Optional[str] = candidate
        self._lock_timeout = lock_timeout

    @classmethod
    def initialize(cls, candidate: Optional[str]) -> "PendingFile":
        """Create the cell seeded with the scanner result (may be ``None``)."""
        return cls(candidate)

    @classmethod
    def from_args(cls, argv: Optional[Sequence[str]] = None) -> "PendingFile":
        """Scan launch arguments and seed a new cell with the result."""
        return cls.initialize(startup_file_from_args(argv))

    @property
    def is_pending(self) -> bool:
        return self._value is not None

    def take(self) -> Optional[str]:
        """
        Remove and return the pending path.

        :return: The path on the first call if one was captured,
            ``None`` on every other call or if the lock is unavailable.
        """
        if not self._lock.acquire(timeout=self._lock_timeout):
            logger.warning("Pending file lock unavailable after %.1fs; treating as empty", self._lock_timeout)
            return None
        try:
            value, self._value = self._value, None
        finally:
            self._lock.release()

        if value is not None:
            logger.info("Handing off startup file: %s", value)
        return value
