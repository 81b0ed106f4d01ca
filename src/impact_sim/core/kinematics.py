"""Orbit position as a pure function of simulated time."""
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .config import ORBIT_CFG, PARAMETER_CFG, OrbitCfg, ParameterCfg
from .model import OrbitAnimationState, SimulationParameters
from .physics import clamp


@dataclass(frozen=True, eq=False)
class OrbitPose:
    position: np.ndarray
    rotation: np.ndarray


def orbit_phase(simulated_time: float, speed_factor: float, cfg: OrbitCfg = ORBIT_CFG) -> float:
    """Angle along the orbit; the speed slider scales the angular rate."""

    return simulated_time * (speed_factor / cfg.speed_divisor)


def orbit_period(speed_factor: float, cfg: OrbitCfg = ORBIT_CFG) -> float:
    if speed_factor == 0.0:
        return math.inf
    return 2.0 * math.pi * cfg.speed_divisor / abs(speed_factor)


def position_at(
    simulated_time: float,
    speed_factor: float,
    inclination_deg: float,
    radius: float = ORBIT_CFG.radius,
    cfg: OrbitCfg = ORBIT_CFG,
) -> OrbitPose:
    """Position and spin of the body at ``simulated_time`` seconds.

    Any time value is valid, so callers may scrub or restart freely.
    """

    t = orbit_phase(simulated_time, speed_factor, cfg)
    inclination = math.radians(inclination_deg)
    position = np.array(
        [
            math.cos(t) * radius,
            math.sin(t) * math.sin(inclination) * radius,
            math.sin(t) * math.cos(inclination) * radius,
        ],
        dtype=float,
    )
    spin = cfg.spin_rate * simulated_time
    rotation = np.array(
        [
            math.sin(spin) * cfg.spin_amplitude,
            math.cos(spin) * cfg.spin_amplitude,
            0.0,
        ],
        dtype=float,
    )
    return OrbitPose(position=position, rotation=rotation)


def body_scale(
    diameter_m: float,
    cfg: OrbitCfg = ORBIT_CFG,
    parameter_cfg: ParameterCfg = PARAMETER_CFG,
) -> float:
    """Cosmetic size factor; linear over the slider range, clamped at both ends."""

    lo, hi = parameter_cfg.diameter_range
    if not math.isfinite(diameter_m):
        diameter_m = lo
    fraction = clamp((diameter_m - lo) / (hi - lo), 0.0, 1.0)
    return cfg.min_scale + fraction * (cfg.max_scale - cfg.min_scale)


def orbit_path(
    inclination_deg: float,
    radius: float = ORBIT_CFG.radius,
    segments: int = ORBIT_CFG.path_segments,
) -> np.ndarray:
    """Closed polyline of the orbit, shape ``(segments + 1, 3)``."""

    if segments < 3:
        raise ValueError("segments must be at least 3")
    inclination = math.radians(inclination_deg)
    angles = np.linspace(0.0, 2.0 * math.pi, segments + 1)
    return np.column_stack(
        (
            np.cos(angles) * radius,
            np.sin(angles) * math.sin(inclination) * radius,
            np.sin(angles) * math.cos(inclination) * radius,
        )
    )


def animation_state(
    time_offset: float,
    parameters: SimulationParameters,
    cfg: OrbitCfg = ORBIT_CFG,
) -> OrbitAnimationState:
    pose = position_at(time_offset, parameters.speed_km_s, parameters.inclination_deg, cfg.radius, cfg)
    return OrbitAnimationState(
        time_offset=time_offset,
        position=pose.position,
        rotation=pose.rotation,
        scale=body_scale(parameters.diameter_m, cfg),
        orbit_tilt=math.radians(parameters.inclination_deg),
    )


__all__ = [
    "OrbitPose",
    "animation_state",
    "body_scale",
    "orbit_path",
    "orbit_period",
    "orbit_phase",
    "position_at",
]
