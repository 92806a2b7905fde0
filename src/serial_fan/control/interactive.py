"""
Operator console loop.

Reads one command per line and either switches the run mode, sends a duty
value, or parks the fan and requests shutdown. Keywords may be abbreviated to
any prefix ("a" for auto, "c" for cancel, "q" for quit).
"""

import logging
import re
import sys
import time
from typing import Optional, TextIO

from ..hardware import LinkError
from ..protocol import MAX_DUTY, PARK_DUTY, encode, is_valid_duty
from .mode import ModeCoordinator
from .shutdown import ShutdownCoordinator

logger = logging.getLogger(__name__)

PROMPT = "Command -->:"
EXIT_WORDS = ("exit", "quit")
AUTO_WORD = "auto"
CANCEL_WORD = "cancel"

_INTEGER = re.compile(r"^[+-]?\d+$")


def normalize(line: str) -> str:
    """Trim whitespace and surrounding '.()' characters, lowercase."""
    return line.strip(" \t\r\n.()").lower()


def matches(command: str, *words: str) -> bool:
    """True if a non-empty command is a prefix of one of the keywords."""
    return bool(command) and any(word.startswith(command) for word in words)


def parse_duty(command: str) -> Optional[int]:
    """
    Parse a decimal integer, None if the command is not one.

    Values with more than three significant digits come back as MAX_DUTY + 1
    (or -1 when negative) without converting the whole string.
    """
    if not _INTEGER.match(command):
        return None
    if len(command.lstrip("+-").lstrip("0")) > 3:
        return -1 if command.startswith("-") else MAX_DUTY + 1
    return int(command)


class InteractiveLoop:
    """Console command loop; the only writer of the run mode."""

    def __init__(
        self,
        link,
        coordinator: ModeCoordinator,
        shutdown: ShutdownCoordinator,
        stream: Optional[TextIO] = None,
        out: Optional[TextIO] = None,
        park_duty: int = PARK_DUTY,
        exit_grace: float = 0.5,
    ):
        self.link = link
        self.coordinator = coordinator
        self.shutdown = shutdown
        self.stream = stream
        self.out = out
        self.park_duty = park_duty
        self.exit_grace = exit_grace
        self.running = False

    def _print(self, *args, **kwargs) -> None:
        print(*args, file=self.out or sys.stdout, **kwargs)

    def _fatal(self, reason: str) -> None:
        logger.critical(reason)
        self.running = False
        self.shutdown.request(1, reason)

    def _send(self, duty: int) -> bool:
        try:
            written = self.link.write(encode(duty))
        except LinkError as e:
            self._fatal(f"Write to device failed: {e}")
            return False
        logger.info(f"Written {written} bytes")
        return True

    def run(self) -> int:
        """
        Read and handle commands until exit or console failure.

        Returns:
            Number of lines handled
        """
        stream = self.stream or sys.stdin
        handled = 0
        self.running = True

        while self.running:
            try:
                self._print(PROMPT, end="", flush=True)
            except OSError as e:
                self._fatal(f"Console write failed: {e}")
                break

            try:
                line = stream.readline()
            except (OSError, ValueError) as e:
                self._fatal(f"Console read failed: {e}")
                break

            if not line:
                self._fatal("Console closed (EOF)")
                break

            try:
                self._print(f"Received command: {line.rstrip()}")
                self.handle(line)
            except OSError as e:
                self._fatal(f"Console write failed: {e}")
                break
            handled += 1

        return handled

    def handle(self, line: str) -> None:
        """Dispatch a single console line."""
        command = normalize(line)
        automatic = self.coordinator.is_automatic()

        duty = parse_duty(command)
        if duty is not None:
            if not is_valid_duty(duty):
                self._print(f"✗ Valid input in range: 0 ~ 100, received: {command}")
            elif automatic:
                self._print("Currently running on auto mode, command ignored")
            else:
                self._send(duty)
            return

        if matches(command, *EXIT_WORDS):
            if automatic:
                self._print(
                    'Currently running on auto mode, use "cancel" to switch '
                    "to managed mode first"
                )
            else:
                self._exit()
        elif matches(command, AUTO_WORD):
            if self.coordinator.set_automatic():
                self._print("Switch to auto run mode ...")
            else:
                self._print("Already running on auto mode")
        elif matches(command, CANCEL_WORD):
            if self.coordinator.set_managed():
                self._print("Exit from auto run mode ...")
            else:
                self._print("Running on managed mode already")
        else:
            self._print("Invalid command !")

    def _exit(self) -> None:
        """Park the fan, then hand control back to the entry point."""
        if not self._send(self.park_duty):
            return

        # Let the frame drain before the port is closed
        time.sleep(self.exit_grace)
        self.running = False
        self.shutdown.request(0, "Operator exit")
