"""Data models for the impact simulation state."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

import numpy as np

from .config import PARAMETER_CFG, ParameterCfg
from .errors import ErrorDetail


class Unavailable(Enum):
    """Marker for a value the backend did not provide."""

    UNAVAILABLE = "unavailable"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE = Unavailable.UNAVAILABLE


class CoordinateSource(Enum):
    LOCAL_ESTIMATE = "local-estimate"
    BACKEND = "backend"


class ResponseShape(Enum):
    NESTED = "nested"
    FLAT = "flat"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SimulationParameters:
    """Immutable snapshot of the user-tunable inputs."""

    diameter_m: float = PARAMETER_CFG.default_diameter
    speed_km_s: float = PARAMETER_CFG.default_speed
    inclination_deg: float = PARAMETER_CFG.default_inclination
    impact_year: int = PARAMETER_CFG.default_year
    meteor_type: str = PARAMETER_CFG.default_meteor_type

    def clamped(self, cfg: ParameterCfg = PARAMETER_CFG) -> "SimulationParameters":
        lo, hi = cfg.inclination_range
        year_lo, year_hi = cfg.year_range
        return dataclasses.replace(
            self,
            inclination_deg=max(lo, min(hi, self.inclination_deg)),
            impact_year=int(max(year_lo, min(year_hi, self.impact_year))),
        )


@dataclass(frozen=True)
class PhysicsEstimate:
    mass_kg: float
    energy_joules: float
    energy_megatons: float
    energy_tons: float

    @property
    def megatons_text(self) -> str:
        return f"{self.energy_megatons:.2f} MT"


@dataclass(frozen=True)
class ImpactCoordinate:
    latitude: float
    longitude: float
    source: CoordinateSource


@dataclass(frozen=True)
class PredictionResult:
    """Backend prediction normalised into one canonical shape."""

    coordinates: ImpactCoordinate | Unavailable = UNAVAILABLE
    impact_probability: float | Unavailable = UNAVAILABLE
    crater_diameter_km: float | Unavailable = UNAVAILABLE
    historical_context: str | Unavailable = UNAVAILABLE
    population_impact: str | Unavailable = UNAVAILABLE
    shape: ResponseShape = ResponseShape.UNKNOWN
    raw: Any = None


@dataclass(frozen=True)
class Idle:
    generation: int = 0


@dataclass(frozen=True)
class Running:
    generation: int
    parameters: SimulationParameters


@dataclass(frozen=True)
class Succeeded:
    generation: int
    estimate: PhysicsEstimate
    prediction: PredictionResult | None


@dataclass(frozen=True)
class Failed:
    generation: int
    error: ErrorDetail


RunState = Union[Idle, Running, Succeeded, Failed]


@dataclass(frozen=True, eq=False)
class OrbitAnimationState:
    time_offset: float
    position: np.ndarray
    rotation: np.ndarray
    scale: float
    orbit_tilt: float


@dataclass
class SimulationSession:
    """Per-client container shared by the run controller and the scheduler."""

    parameters: SimulationParameters = field(default_factory=SimulationParameters)
    run_state: RunState = field(default_factory=Idle)
    estimate: PhysicsEstimate | None = None
    coordinate: ImpactCoordinate | None = None
    prediction: PredictionResult | None = None
    animation: OrbitAnimationState | None = None

    def update_parameters(self, **changes: Any) -> SimulationParameters:
        self.parameters = dataclasses.replace(self.parameters, **changes).clamped()
        return self.parameters

    @property
    def loading(self) -> bool:
        return isinstance(self.run_state, Running)


__all__ = [
    "UNAVAILABLE",
    "CoordinateSource",
    "Failed",
    "Idle",
    "ImpactCoordinate",
    "OrbitAnimationState",
    "PhysicsEstimate",
    "PredictionResult",
    "ResponseShape",
    "RunState",
    "Running",
    "SimulationParameters",
    "SimulationSession",
    "Succeeded",
    "Unavailable",
]
