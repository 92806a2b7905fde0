"""
Control loops and the coordination state they share.
"""

from .auto import AutomaticLoop, compute_duty
from .interactive import InteractiveLoop
from .mode import ModeCoordinator, RunMode
from .shutdown import ShutdownCoordinator

__all__ = [
    "AutomaticLoop",
    "compute_duty",
    "InteractiveLoop",
    "ModeCoordinator",
    "RunMode",
    "ShutdownCoordinator",
]
