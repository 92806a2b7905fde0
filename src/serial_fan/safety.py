"""Park the fan and shut down on SIGINT / SIGTERM."""

import logging
import signal

from .control.mode import ModeCoordinator
from .control.shutdown import ShutdownCoordinator
from .hardware import LinkError
from .protocol import PARK_DUTY, encode

logger = logging.getLogger(__name__)


class SignalGuard:
    """Interrupt handling for the controller process."""

    def __init__(
        self,
        link,
        coordinator: ModeCoordinator,
        shutdown: ShutdownCoordinator,
        park_duty: int = PARK_DUTY,
    ):
        self.link = link
        self.coordinator = coordinator
        self.shutdown = shutdown
        self.park_duty = park_duty

    def install(self) -> None:
        """Register handlers. Must be called from the main thread."""
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    def park(self) -> bool:
        """Best-effort park write. Returns True if the frame was sent."""
        # Stop the automatic loop from overwriting the park value
        self.coordinator.set_managed()
        try:
            self.link.write(encode(self.park_duty))
        except LinkError as e:
            logger.error(f"Could not park fan: {e}")
            return False
        return True

    def _signal_handler(self, signum, frame) -> None:
        """Handle interrupt signals."""
        print(f"\n\nReceived signal {signum}, parking fan at {self.park_duty}%...")
        self.park()
        self.shutdown.request(128 + signum, f"Interrupted by signal {signum}")
