"""One-shot shutdown signal between the loops and the entry point."""

import logging
import threading
from typing import Optional

logger = logging.getLogger(__name__)


class ShutdownCoordinator:
    """Fires once, carrying the process exit code."""

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._exit_code: Optional[int] = None
        self._reason = ""

    @property
    def is_requested(self) -> bool:
        return self._event.is_set()

    @property
    def exit_code(self) -> Optional[int]:
        return self._exit_code

    @property
    def reason(self) -> str:
        return self._reason

    def request(self, exit_code: int = 0, reason: str = "") -> bool:
        """
        Ask the entry point to terminate.

        Returns:
            True for the first request, False if shutdown was already requested
        """
        with self._lock:
            if self._event.is_set():
                logger.debug(f"Shutdown already requested, ignoring: {reason}")
                return False
            self._exit_code = exit_code
            self._reason = reason
            self._event.set()

        logger.info(f"Shutdown requested (exit code {exit_code}): {reason}")
        return True

    def wait(self, timeout: Optional[float] = None) -> Optional[int]:
        """
        Block until shutdown is requested.

        Returns:
            The requested exit code, or None on timeout
        """
        if not self._event.wait(timeout):
            return None
        return self._exit_code
