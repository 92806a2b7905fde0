import pytest
import serial

from serial_fan import hardware
from serial_fan.hardware import LinkError, SerialLink


class FakeSerial:
    instances = []

    def __init__(self, port, baudrate, bytesize, timeout):
        self.port = port
        self.baudrate = baudrate
        self.bytesize = bytesize
        self.timeout = timeout
        self.is_open = True
        self.written = []
        self.replies = [b"OK\r\n"]
        self.fail = False
        FakeSerial.instances.append(self)

    def write(self, data):
        if self.fail:
            raise serial.SerialException("write timeout")
        self.written.append(data)
        return len(data)

    def readline(self):
        return self.replies.pop(0) if self.replies else b""

    def close(self):
        self.is_open = False


@pytest.fixture
def fake_serial(monkeypatch):
    FakeSerial.instances = []
    monkeypatch.setattr(hardware.serial, "Serial", FakeSerial)
    return FakeSerial


def test_open_uses_line_settings(fake_serial):
    link = SerialLink("/dev/ttyUSB0").open()

    port = fake_serial.instances[0]
    assert link.is_open
    assert (port.port, port.baudrate, port.bytesize, port.timeout) == (
        "/dev/ttyUSB0",
        9600,
        8,
        3.0,
    )


def test_open_failure_raises_link_error(monkeypatch):
    def refuse(**kwargs):
        raise serial.SerialException("could not open port")

    monkeypatch.setattr(hardware.serial, "Serial", refuse)

    with pytest.raises(LinkError, match="COM6"):
        SerialLink("COM6").open()


def test_write_sends_ascii_and_counts_bytes(fake_serial):
    link = SerialLink("COM6").open()

    assert link.write("N,2#50;") == 7
    assert fake_serial.instances[0].written == [b"N,2#50;"]


def test_write_failure_raises_link_error(fake_serial):
    link = SerialLink("COM6").open()
    fake_serial.instances[0].fail = True

    with pytest.raises(LinkError):
        link.write("N,2#50;")


def test_write_on_closed_link(fake_serial):
    link = SerialLink("COM6")

    with pytest.raises(LinkError, match="not open"):
        link.write("N,2#50;")


def test_read_line(fake_serial):
    link = SerialLink("COM6").open()

    assert link.read_line() == "OK"
    assert link.read_line() == ""


def test_close_is_idempotent(fake_serial):
    with SerialLink("COM6") as link:
        assert link.is_open

    port = fake_serial.instances[0]
    assert not port.is_open
    assert not link.is_open
    link.close()
