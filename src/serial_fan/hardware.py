"""Serial link to the fan controller board."""

import logging
import threading
from typing import Optional

import serial

logger = logging.getLogger(__name__)


class LinkError(Exception):
    """Serial link access error."""

    pass


class SerialLink:
    """Byte-oriented serial connection shared by both control loops."""

    def __init__(
        self,
        port: str,
        baudrate: int = 9600,
        bytesize: int = 8,
        timeout: float = 3.0,
    ):
        self.port = port
        self.baudrate = baudrate
        self.bytesize = bytesize
        self.timeout = timeout

        self._serial: Optional[serial.Serial] = None
        # Both loops write through here; keep frames from interleaving
        self._write_lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self) -> "SerialLink":
        """Open the serial port."""
        if self.is_open:
            return self

        try:
            self._serial = serial.Serial(
                port=self.port,
                baudrate=self.baudrate,
                bytesize=self.bytesize,
                timeout=self.timeout,
            )
        except (serial.SerialException, ValueError) as e:
            raise LinkError(f"Could not open serial port {self.port}: {e}") from e

        logger.info(f"Opened {self.port} ({self.baudrate} baud, {self.bytesize} data bits)")
        return self

    def write(self, frame: str) -> int:
        """
        Send one frame to the device.

        Args:
            frame: Encoded frame (ASCII)

        Returns:
            Number of bytes written

        Raises:
            LinkError: If the port is closed or the write fails
        """
        if not self.is_open:
            raise LinkError(f"Serial port {self.port} is not open")

        data = frame.encode("ascii")
        with self._write_lock:
            try:
                written = self._serial.write(data)
            except (serial.SerialException, OSError) as e:
                raise LinkError(f"Write to {self.port} failed: {e}") from e

        logger.debug(f"Written {written} bytes: {frame}")
        return written

    def read_line(self) -> str:
        """Read one line sent back by the device ("" on timeout)."""
        if not self.is_open:
            raise LinkError(f"Serial port {self.port} is not open")

        try:
            raw = self._serial.readline()
        except (serial.SerialException, OSError) as e:
            raise LinkError(f"Read from {self.port} failed: {e}") from e

        return raw.decode("ascii", errors="replace").rstrip("\r\n")

    def close(self) -> None:
        """Close the port. Safe to call more than once."""
        if self._serial is None:
            return

        try:
            self._serial.close()
        except (serial.SerialException, OSError) as e:
            logger.warning(f"Error closing {self.port}: {e}")
        finally:
            self._serial = None
            logger.info(f"Closed {self.port}")

    def __enter__(self) -> "SerialLink":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
