from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


@dataclass
class CameraState:
    yaw: float
    pitch: float
    distance: float
    distance_target: float


class OrbitCamera:
    """Perspective camera orbiting the origin; drag rotates, wheel zooms."""

    def __init__(
        self,
        size: tuple[int, int],
        distance: float,
        *,
        min_distance: float,
        max_distance: float,
        fov_deg: float = 75.0,
        near: float = 0.1,
        sensitivity: float = 0.01,
    ) -> None:
        self._size = size
        self._min_distance = min_distance
        self._max_distance = max_distance
        self._fov = math.radians(fov_deg)
        self._near = near
        self._sensitivity = sensitivity
        distance = _clamp(distance, min_distance, max_distance)
        self._state = CameraState(yaw=0.0, pitch=0.0, distance=distance, distance_target=distance)
        self._drag_anchor: tuple[int, int] | None = None

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def update_size(self, size: tuple[int, int]) -> None:
        self._size = size

    @property
    def yaw(self) -> float:
        return self._state.yaw

    @property
    def pitch(self) -> float:
        return self._state.pitch

    @property
    def distance(self) -> float:
        return self._state.distance

    @property
    def distance_target(self) -> float:
        return self._state.distance_target

    @property
    def dragging(self) -> bool:
        return self._drag_anchor is not None

    def set_zoom(self, distance: float) -> None:
        clamped = _clamp(distance, self._min_distance, self._max_distance)
        self._state.distance = clamped
        self._state.distance_target = clamped

    def zoom_by(self, delta: float) -> None:
        self._state.distance_target = _clamp(
            self._state.distance_target + delta, self._min_distance, self._max_distance
        )

    def update(self, smoothing: float = 0.1) -> None:
        state = self._state
        state.distance += (state.distance_target - state.distance) * smoothing
        state.distance = _clamp(state.distance, self._min_distance, self._max_distance)

    def begin_drag(self, position: tuple[int, int]) -> None:
        self._drag_anchor = position

    def drag(self, position: tuple[int, int]) -> None:
        if self._drag_anchor is None:
            return
        dx = position[0] - self._drag_anchor[0]
        dy = position[1] - self._drag_anchor[1]
        self._state.yaw += dx * self._sensitivity
        self._state.pitch = _clamp(
            self._state.pitch + dy * self._sensitivity, -math.pi / 2.0, math.pi / 2.0
        )
        self._drag_anchor = position

    def end_drag(self) -> None:
        self._drag_anchor = None

    def rotation_matrix(self) -> np.ndarray:
        cy, sy = math.cos(self._state.yaw), math.sin(self._state.yaw)
        cp, sp = math.cos(self._state.pitch), math.sin(self._state.pitch)
        yaw = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]])
        pitch = np.array([[1.0, 0.0, 0.0], [0.0, cp, -sp], [0.0, sp, cp]])
        return pitch @ yaw

    def project(self, points: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Screen coordinates ``(N, 2)`` and a mask of points in front of the camera."""

        points = np.atleast_2d(np.asarray(points, dtype=float))
        view = points @ self.rotation_matrix().T
        depth = self._state.distance - view[:, 2]
        visible = depth > self._near
        safe_depth = np.where(visible, depth, 1.0)
        width, height = self._size
        focal = (height / 2.0) / math.tan(self._fov / 2.0)
        screen = np.empty((points.shape[0], 2), dtype=float)
        screen[:, 0] = width / 2.0 + focal * view[:, 0] / safe_depth
        screen[:, 1] = height / 2.0 - focal * view[:, 1] / safe_depth
        return screen, visible
