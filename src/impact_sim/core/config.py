"""Configuration dataclasses for the impact simulator."""
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Callable, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _env_number(name: str, parse: Callable[[str], T], default: T) -> T:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return parse(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r, using %r", name, raw, default)
        return default


@dataclass(frozen=True)
class PhysicsCfg:
    density: float = 3_000.0
    joules_per_ton_tnt: float = 4.184e9
    joules_per_megaton_tnt: float = 4.184e15
    yield_decimals: int = 2


@dataclass(frozen=True)
class ParameterCfg:
    diameter_range: tuple[float, float] = (10.0, 500.0)
    speed_range: tuple[float, float] = (5.0, 50.0)
    inclination_range: tuple[float, float] = (0.0, 90.0)
    year_range: tuple[int, int] = (1600, 2000)
    default_diameter: float = 100.0
    default_speed: float = 20.0
    default_inclination: float = 45.0
    default_year: int = 1950
    default_meteor_type: str = "generic"
    coordinate_decimals: int = 2


@dataclass(frozen=True)
class OrbitCfg:
    radius: float = 3.0
    speed_divisor: float = 10.0
    spin_rate: float = 2.0
    spin_amplitude: float = 0.1
    min_scale: float = 0.25
    max_scale: float = 2.5
    path_segments: int = 48
    earth_radius: float = 1.5


@dataclass(frozen=True)
class BackendCfg:
    base_url: str = "http://localhost:8000"
    predict_path: str = "/predict"
    timeout: float | None = None
    retries: int = 0
    default_meteor_type: str = "generic"
    default_year: int = 1950

    @classmethod
    def from_env(cls) -> "BackendCfg":
        base = cls()
        timeout = _env_number("IMPACT_BACKEND_TIMEOUT", float, base.timeout)
        if timeout is not None and (not math.isfinite(timeout) or timeout <= 0.0):
            timeout = None
        retries = _env_number("IMPACT_BACKEND_RETRIES", int, base.retries)
        return cls(
            base_url=os.environ.get("IMPACT_BACKEND_URL", base.base_url),
            timeout=timeout,
            retries=max(0, retries),
        )


@dataclass(frozen=True)
class SchedulerCfg:
    frame_interval: float = 1.0 / 60.0
    mount_max_attempts: int = 30
    mount_initial_delay: float = 0.1
    mount_backoff: float = 1.5
    mount_max_delay: float = 1.0


@dataclass(frozen=True)
class RenderCfg:
    window_size: tuple[int, int] = (960, 640)
    canvas_rect: tuple[int, int, int, int] = (470, 70, 460, 460)
    background_color: tuple[int, int, int] = (0, 0, 0)
    wire_color: tuple[int, int, int] = (255, 255, 255)
    orbit_color: tuple[int, int, int] = (255, 255, 255)
    asteroid_color: tuple[int, int, int] = (255, 34, 34)
    muted_text_color: tuple[int, int, int] = (204, 204, 204)
    footer_text_color: tuple[int, int, int] = (102, 102, 102)
    panel_color: tuple[int, int, int, int] = (17, 17, 17, 255)
    track_color: tuple[int, int, int] = (51, 51, 51)
    button_color: tuple[int, int, int, int] = (0, 0, 0, 255)
    button_hover_color: tuple[int, int, int, int] = (255, 255, 255, 255)
    button_text_color: tuple[int, int, int] = (255, 255, 255)
    button_hover_text_color: tuple[int, int, int] = (0, 0, 0)
    font_names: tuple[str, ...] = ("Nova Square", "DejaVu Sans Mono", "monospace")
    title_font_size: int = 28
    body_font_size: int = 18
    small_font_size: int = 14
    fov_deg: float = 75.0
    near_plane: float = 0.1
    camera_distance: float = 6.0
    camera_min_distance: float = 3.0
    camera_max_distance: float = 15.0
    drag_sensitivity: float = 0.01
    zoom_step: float = 0.5
    camera_smoothing: float = 0.25
    earth_segments: tuple[int, int] = (12, 10)
    asteroid_edge: float = 0.15
    target_fps: int = 60


PHYSICS_CFG = PhysicsCfg()
PARAMETER_CFG = ParameterCfg()
ORBIT_CFG = OrbitCfg()
BACKEND_CFG = BackendCfg()
SCHEDULER_CFG = SchedulerCfg()
RENDER_CFG = RenderCfg()


__all__ = [
    "BACKEND_CFG",
    "ORBIT_CFG",
    "PARAMETER_CFG",
    "PHYSICS_CFG",
    "RENDER_CFG",
    "SCHEDULER_CFG",
    "BackendCfg",
    "OrbitCfg",
    "ParameterCfg",
    "PhysicsCfg",
    "RenderCfg",
    "SchedulerCfg",
]
