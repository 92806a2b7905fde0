"""
Run mode shared by the automatic and interactive loops.

The interactive loop is the only writer. Switching to automatic hands a wake
notification to the automatic loop and waits until it has been taken, so
when set_automatic() returns the automatic loop is running.
"""

import logging
import threading
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class RunMode(Enum):
    AUTOMATIC = "automatic"
    MANAGED = "managed"


class ModeCoordinator:
    """Holds the run mode and the wake rendezvous."""

    def __init__(self, mode: RunMode = RunMode.MANAGED):
        self._mode = mode
        self._cond = threading.Condition()
        self._wake_pending = False

    @property
    def mode(self) -> RunMode:
        return self._mode

    def is_automatic(self) -> bool:
        # Unlocked read, a stale value for one iteration is fine
        return self._mode is RunMode.AUTOMATIC

    def set_automatic(self, timeout: Optional[float] = None) -> bool:
        """
        Switch to automatic mode and wake the automatic loop.

        Args:
            timeout: Max seconds to wait for the automatic loop to take the
                wake. None waits forever.

        Returns:
            True if the mode changed, False if it was already automatic

        Raises:
            TimeoutError: If the wake was not taken within `timeout`
        """
        with self._cond:
            if self._mode is RunMode.AUTOMATIC:
                return False

            self._mode = RunMode.AUTOMATIC
            self._wake_pending = True
            self._cond.notify_all()

            if not self._cond.wait_for(lambda: not self._wake_pending, timeout):
                self._wake_pending = False
                self._mode = RunMode.MANAGED
                raise TimeoutError("Automatic loop did not take the wake signal")

        logger.info("Run mode: automatic")
        return True

    def set_managed(self) -> bool:
        """
        Switch to managed mode.

        The automatic loop sees the flag at the top of its next iteration and
        blocks itself, so no notification is sent.

        Returns:
            True if the mode changed, False if it was already managed
        """
        with self._cond:
            if self._mode is RunMode.MANAGED:
                return False
            self._mode = RunMode.MANAGED

        logger.info("Run mode: managed")
        return True

    def wait_until_automatic(self) -> None:
        """Block the automatic loop until the mode is automatic."""
        with self._cond:
            while True:
                # A wake posted while the loop was still active is taken here
                if self._wake_pending:
                    self._wake_pending = False
                    self._cond.notify_all()
                if self._mode is RunMode.AUTOMATIC:
                    return
                self._cond.wait()
