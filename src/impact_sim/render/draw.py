from __future__ import annotations

import math
from typing import Iterable

import numpy as np
import pygame

from impact_sim.core.config import RENDER_CFG, RenderCfg
from impact_sim.core.scene import SceneDescription

from .camera import OrbitCamera

_CUBE_EDGES = (
    (0, 1), (1, 3), (3, 2), (2, 0),
    (4, 5), (5, 7), (7, 6), (6, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)


def sphere_wireframe(radius: float, segments: tuple[int, int] = (12, 10)) -> list[np.ndarray]:
    """Latitude rings and meridians of a sphere as closed/open polylines."""

    width_segments, height_segments = segments
    lines: list[np.ndarray] = []
    theta = np.linspace(0.0, 2.0 * math.pi, width_segments + 1)
    for i in range(1, height_segments):
        phi = math.pi * i / height_segments
        lines.append(
            np.column_stack(
                (
                    radius * math.sin(phi) * np.cos(theta),
                    np.full_like(theta, radius * math.cos(phi)),
                    radius * math.sin(phi) * np.sin(theta),
                )
            )
        )
    phi = np.linspace(0.0, math.pi, height_segments + 1)
    for j in range(width_segments):
        angle = 2.0 * math.pi * j / width_segments
        lines.append(
            np.column_stack(
                (
                    radius * np.sin(phi) * math.cos(angle),
                    radius * np.cos(phi),
                    radius * np.sin(phi) * math.sin(angle),
                )
            )
        )
    return lines


def euler_matrix(angles: Iterable[float]) -> np.ndarray:
    ax, ay, az = angles
    cx, sx = math.cos(ax), math.sin(ax)
    cy, sy = math.cos(ay), math.sin(ay)
    cz, sz = math.cos(az), math.sin(az)
    rx = np.array([[1.0, 0.0, 0.0], [0.0, cx, -sx], [0.0, sx, cx]])
    ry = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]])
    rz = np.array([[cz, -sz, 0.0], [sz, cz, 0.0], [0.0, 0.0, 1.0]])
    return rx @ ry @ rz


def cube_corners(edge: float, rotation: Iterable[float], position: Iterable[float]) -> np.ndarray:
    half = edge / 2.0
    corners = np.array(
        [[x, y, z] for x in (-half, half) for y in (-half, half) for z in (-half, half)],
        dtype=float,
    )
    return corners @ euler_matrix(rotation).T + np.asarray(tuple(position), dtype=float)


def draw_polyline(
    surface: pygame.Surface,
    camera: OrbitCamera,
    points: np.ndarray,
    color: tuple[int, int, int],
    *,
    offset: tuple[int, int] = (0, 0),
    width: int = 1,
) -> None:
    screen, visible = camera.project(points)
    screen += offset
    for idx in range(len(screen) - 1):
        if visible[idx] and visible[idx + 1]:
            pygame.draw.line(surface, color, screen[idx], screen[idx + 1], width)


def draw_edges(
    surface: pygame.Surface,
    camera: OrbitCamera,
    corners: np.ndarray,
    color: tuple[int, int, int],
    *,
    offset: tuple[int, int] = (0, 0),
) -> None:
    screen, visible = camera.project(corners)
    screen += offset
    for a, b in _CUBE_EDGES:
        if visible[a] and visible[b]:
            pygame.draw.line(surface, color, screen[a], screen[b], 1)


class SceneCanvas:
    """Pygame rendering target for the orbit scene."""

    def __init__(self, rect: tuple[int, int, int, int], camera: OrbitCamera, cfg: RenderCfg = RENDER_CFG) -> None:
        self.rect = pygame.Rect(rect)
        self.camera = camera
        self._cfg = cfg
        self._scene: SceneDescription | None = None
        self._earth_lines: list[np.ndarray] = []
        self._earth_radius: float | None = None

    @property
    def scene(self) -> SceneDescription | None:
        return self._scene

    def apply_scene(self, scene: SceneDescription) -> None:
        self._scene = scene

    def draw(self, surface: pygame.Surface) -> None:
        cfg = self._cfg
        pygame.draw.rect(surface, cfg.background_color, self.rect)
        pygame.draw.rect(surface, cfg.wire_color, self.rect, 2)
        scene = self._scene
        if scene is None:
            return

        if self._earth_radius != scene.earth_radius:
            self._earth_lines = sphere_wireframe(scene.earth_radius, cfg.earth_segments)
            self._earth_radius = scene.earth_radius

        previous_clip = surface.get_clip()
        surface.set_clip(self.rect.inflate(-4, -4))
        offset = self.rect.topleft
        for line in self._earth_lines:
            draw_polyline(surface, self.camera, line, cfg.wire_color, offset=offset)
        draw_polyline(surface, self.camera, scene.orbit_path, cfg.orbit_color, offset=offset)
        corners = cube_corners(cfg.asteroid_edge * scene.body_scale, scene.body_rotation, scene.body_position)
        draw_edges(surface, self.camera, corners, cfg.asteroid_color, offset=offset)
        surface.set_clip(previous_clip)
