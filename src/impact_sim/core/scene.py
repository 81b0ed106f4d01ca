"""Numeric scene handed to the rendering target every tick."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from .config import ORBIT_CFG, OrbitCfg
from .kinematics import orbit_path
from .model import OrbitAnimationState


@dataclass(frozen=True, eq=False)
class SceneDescription:
    body_position: tuple[float, float, float]
    body_scale: float
    body_rotation: tuple[float, float, float]
    orbit_tilt: float
    orbit_path: np.ndarray
    earth_radius: float


class RenderTarget(Protocol):
    def apply_scene(self, scene: SceneDescription) -> None:
        ...


def build_scene(state: OrbitAnimationState, cfg: OrbitCfg = ORBIT_CFG) -> SceneDescription:
    return SceneDescription(
        body_position=tuple(float(v) for v in state.position),
        body_scale=state.scale,
        body_rotation=tuple(float(v) for v in state.rotation),
        orbit_tilt=state.orbit_tilt,
        orbit_path=orbit_path(math.degrees(state.orbit_tilt), cfg.radius, cfg.path_segments),
        earth_radius=cfg.earth_radius,
    )


__all__ = ["RenderTarget", "SceneDescription", "build_scene"]
