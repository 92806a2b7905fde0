import threading
from typing import List

import pytest

from serial_fan.control import ModeCoordinator, ShutdownCoordinator
from serial_fan.hardware import LinkError


class FakeLink:
    """Records frames instead of talking to a serial port."""

    def __init__(self, fail_writes: bool = False, fail_open: bool = False):
        self.frames: List[str] = []
        self.fail_writes = fail_writes
        self.fail_open = fail_open
        self.is_open = False
        self._lock = threading.Lock()

    def open(self):
        if self.fail_open:
            raise LinkError("port busy")
        self.is_open = True
        return self

    def write(self, frame: str) -> int:
        if self.fail_writes:
            raise LinkError("device unplugged")
        with self._lock:
            self.frames.append(frame)
        return len(frame)

    def close(self) -> None:
        self.is_open = False

    @property
    def write_count(self) -> int:
        with self._lock:
            return len(self.frames)


class FakeSampler:
    """Returns scripted utilization values, repeating the last one."""

    def __init__(self, *values: float):
        self.values = list(values) or [0.0]
        self.calls = 0

    def sample(self) -> float:
        value = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return value


def receive_wake(coordinator: ModeCoordinator) -> threading.Thread:
    """Stand in for a blocked automatic loop that takes one wake."""
    thread = threading.Thread(target=coordinator.wait_until_automatic, daemon=True)
    thread.start()
    return thread


@pytest.fixture
def link():
    return FakeLink().open()


@pytest.fixture
def coordinator():
    return ModeCoordinator()


@pytest.fixture
def shutdown():
    return ShutdownCoordinator()
