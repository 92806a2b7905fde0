import io

import pytest

from serial_fan import cli
from serial_fan.config import CONFIG_ENV, PORT_ENV, Settings
from serial_fan.safety import SignalGuard
from serial_fan.utils import platform_info

from conftest import FakeLink


@pytest.fixture(autouse=True)
def no_signal_handlers(monkeypatch):
    monkeypatch.setattr(SignalGuard, "install", lambda self: None)
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.delenv(PORT_ENV, raising=False)


def fast_settings():
    return Settings(port="loop://", exit_grace=0, period=0.01)


def test_run_exits_zero_after_operator_exit():
    link = FakeLink()

    code = cli.run(fast_settings(), link=link, stream=io.StringIO("20\nexit\n"))

    assert code == 0
    assert link.frames == ["N,2#20;", "N,2#50;"]
    assert not link.is_open


def test_run_exits_nonzero_on_console_eof():
    link = FakeLink()

    code = cli.run(fast_settings(), link=link, stream=io.StringIO("20\n"))

    assert code == 1
    assert not link.is_open


def test_run_fails_when_port_cannot_open():
    assert cli.run(fast_settings(), link=FakeLink(fail_open=True)) == 1


def test_main_applies_port_flag(monkeypatch, capsys):
    seen = {}

    def fake_run(settings):
        seen["port"] = settings.port
        return 0

    monkeypatch.setattr(cli, "run", fake_run)

    with pytest.raises(SystemExit) as exc:
        cli.main(["--port", "COM9"])

    assert exc.value.code == 0
    assert seen["port"] == "COM9"
    assert "Platform:" in capsys.readouterr().out


def test_main_reports_bad_config(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "missing.yaml"))

    with pytest.raises(SystemExit) as exc:
        cli.main([])

    assert exc.value.code == 1
    assert "✗" in capsys.readouterr().out


def test_platform_info_fields():
    info = platform_info()

    assert len(info) == 3
    assert all(isinstance(part, str) for part in info)
