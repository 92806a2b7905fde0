"""Serial fan controller driven by CPU load or operator commands."""

from .control import InteractiveLoop, AutomaticLoop, ModeCoordinator, ShutdownCoordinator
from .hardware import LinkError, SerialLink
from .load import LoadSampler
from .protocol import encode

__version__ = "0.1.0"

__all__ = [
    "AutomaticLoop",
    "InteractiveLoop",
    "LinkError",
    "LoadSampler",
    "ModeCoordinator",
    "SerialLink",
    "ShutdownCoordinator",
    "encode",
]
