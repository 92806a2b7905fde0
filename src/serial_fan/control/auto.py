"""Automatic duty adjustment from CPU load."""

import logging
import time
from typing import Optional

import numpy as np

from ..hardware import LinkError
from ..protocol import encode
from .mode import ModeCoordinator
from .shutdown import ShutdownCoordinator

logger = logging.getLogger(__name__)

BASE_DUTY = 40.0
LOAD_GAIN = 0.8
FLOOR_DUTY = 5.0


def compute_duty(utilization: float) -> int:
    """
    Map CPU utilization to a duty value.

    duty = max(40 - 0.8 * ceil(clamp(utilization, 0, 100)), 5)

    Args:
        utilization: Mean CPU utilization in percent

    Returns:
        Duty in 5-40
    """
    load = np.ceil(np.clip(utilization, 0.0, 100.0))
    return int(max(BASE_DUTY - LOAD_GAIN * load, FLOOR_DUTY))


class AutomaticLoop:
    """
    Writes load-derived duty values while the run mode is automatic.

    Blocks on the mode coordinator while managed. There is no stop method,
    the thread ends with the process.
    """

    def __init__(
        self,
        link,
        sampler,
        coordinator: ModeCoordinator,
        shutdown: ShutdownCoordinator,
        period: float = 1.0,
    ):
        self.link = link
        self.sampler = sampler
        self.coordinator = coordinator
        self.shutdown = shutdown
        self.period = period

    def step(self) -> Optional[int]:
        """
        Sample load, compute duty and send it.

        Returns:
            The duty sent, or None if the mode left automatic while sampling
        """
        utilization = self.sampler.sample()
        if not self.coordinator.is_automatic():
            # Cancelled during the sampling window
            return None
        duty = compute_duty(utilization)
        written = self.link.write(encode(duty))
        logger.debug(f"Auto: load={utilization:.1f}% duty={duty} ({written} bytes)")
        return duty

    def run(self) -> None:
        """Loop until the link fails."""
        while True:
            self.coordinator.wait_until_automatic()
            try:
                self.step()
            except LinkError as e:
                logger.critical(f"Automatic loop write failed: {e}")
                self.shutdown.request(1, f"Device link failure: {e}")
                return
            time.sleep(self.period)
