"""Runtime settings: defaults, optional YAML file, environment overrides."""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_ENV = "SERIAL_FAN_CONFIG"
PORT_ENV = "SERIAL_FAN_PORT"


class ConfigError(Exception):
    """Invalid or unreadable configuration."""

    pass


def default_port() -> str:
    """Platform-typical serial device name."""
    return "COM6" if sys.platform.startswith("win") else "/dev/ttyUSB0"


@dataclass
class Settings:
    # Serial link
    port: str = field(default_factory=default_port)
    baudrate: int = 9600
    bytesize: int = 8
    timeout: float = 3.0  # Read timeout (seconds)

    # Control cadence
    sample_window: float = 0.6  # Load sampling window (seconds)
    period: float = 1.0  # Automatic loop sleep (seconds)
    park_duty: int = 50
    exit_grace: float = 0.5  # Wait after the park write (seconds)

    log_level: str = "INFO"


# (yaml section, yaml key) -> (Settings attribute, type)
_KEYS = {
    ("serial", "port"): ("port", str),
    ("serial", "baudrate"): ("baudrate", int),
    ("serial", "bytesize"): ("bytesize", int),
    ("serial", "timeout"): ("timeout", float),
    ("control", "sample_window"): ("sample_window", float),
    ("control", "period"): ("period", float),
    ("control", "park_duty"): ("park_duty", int),
    ("control", "exit_grace"): ("exit_grace", float),
    ("logging", "level"): ("log_level", str),
}


def _coerce(value: Any, kind: type, key: str) -> Any:
    if kind is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if not isinstance(value, kind) or isinstance(value, bool):
        raise ConfigError(f"{key} must be {kind.__name__}, got {value!r}")
    return value


def settings_from_dict(cfg: Optional[Dict[str, Any]]) -> Settings:
    """Build settings from a parsed YAML mapping. Unknown keys are ignored."""
    settings = Settings()
    if not cfg:
        return settings
    if not isinstance(cfg, dict):
        raise ConfigError("Config root must be a mapping")

    for (section, key), (attr, kind) in _KEYS.items():
        section_cfg = cfg.get(section) or {}
        if not isinstance(section_cfg, dict):
            raise ConfigError(f"Section '{section}' must be a mapping")
        if key in section_cfg:
            value = _coerce(section_cfg[key], kind, f"{section}.{key}")
            setattr(settings, attr, value)

    if not 0 <= settings.park_duty <= 100:
        raise ConfigError(f"control.park_duty must be 0-100, got {settings.park_duty}")

    return settings


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load settings.

    Order: defaults, then the YAML file (argument or $SERIAL_FAN_CONFIG), then
    $SERIAL_FAN_PORT for the port.

    Raises:
        ConfigError: If the file is missing or cannot be parsed
    """
    config_path = config_path or os.environ.get(CONFIG_ENV)

    cfg = None
    if config_path:
        path = Path(config_path)
        try:
            with open(path, "r") as f:
                cfg = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {path}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing config file: {e}")

    settings = settings_from_dict(cfg)

    env_port = os.environ.get(PORT_ENV)
    if env_port:
        settings.port = env_port

    return settings
