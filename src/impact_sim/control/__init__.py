"""Run orchestration and animation scheduling."""

from .controller import RunController
from .display import PLACEHOLDER, DisplayState, display_state
from .scheduler import AnimationScheduler, MountGuard

__all__ = [
    "AnimationScheduler",
    "DisplayState",
    "MountGuard",
    "PLACEHOLDER",
    "RunController",
    "display_state",
]
