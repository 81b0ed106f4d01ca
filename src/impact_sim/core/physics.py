"""Physics helpers for the impact estimate."""
from __future__ import annotations

import logging
import math

from .config import PHYSICS_CFG, PhysicsCfg
from .errors import InvalidParameterError
from .model import PhysicsEstimate, SimulationParameters

logger = logging.getLogger(__name__)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* between *lo* and *hi*."""

    return max(lo, min(hi, value))


def _as_finite(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def coerce_float(value: object, name: str, default: float = 0.0) -> float:
    """Return ``value`` as a finite float, or ``default`` with a warning."""

    number = _as_finite(value)
    if number is None:
        logger.warning("Coercing malformed %s=%r to %s", name, value, default)
        return default
    return number


def coerce_non_negative(value: object, name: str, *, strict: bool = False) -> float:
    """Finite, non-negative ``value``; invalid input becomes 0 unless ``strict``."""

    number = _as_finite(value)
    if number is None or number < 0.0:
        if strict:
            raise InvalidParameterError(name, value)
        logger.warning("Coercing invalid %s=%r to 0", name, value)
        return 0.0
    return number


def compute_mass(
    diameter_m: float,
    cfg: PhysicsCfg = PHYSICS_CFG,
    *,
    strict: bool = False,
) -> float:
    """Mass of a uniform sphere with the configured density."""

    diameter = coerce_non_negative(diameter_m, "diameter_m", strict=strict)
    radius = diameter / 2.0
    # overflows to inf instead of raising
    return cfg.density * (4.0 / 3.0) * math.pi * radius * radius * radius


def compute_energy(
    diameter_m: float,
    speed_km_s: float,
    cfg: PhysicsCfg = PHYSICS_CFG,
    *,
    strict: bool = False,
) -> PhysicsEstimate:
    """Kinetic energy and TNT equivalent for an impactor."""

    mass = compute_mass(diameter_m, cfg, strict=strict)
    speed_m_s = coerce_non_negative(speed_km_s, "speed_km_s", strict=strict) * 1_000.0
    energy = 0.5 * mass * speed_m_s * speed_m_s if mass and speed_m_s else 0.0
    return PhysicsEstimate(
        mass_kg=mass,
        energy_joules=energy,
        energy_megatons=round(energy / cfg.joules_per_megaton_tnt, cfg.yield_decimals),
        energy_tons=energy / cfg.joules_per_ton_tnt,
    )


def estimate_physics(
    parameters: SimulationParameters,
    cfg: PhysicsCfg = PHYSICS_CFG,
) -> PhysicsEstimate:
    return compute_energy(parameters.diameter_m, parameters.speed_km_s, cfg)


__all__ = [
    "PHYSICS_CFG",
    "PhysicsCfg",
    "clamp",
    "coerce_float",
    "coerce_non_negative",
    "compute_energy",
    "compute_mass",
    "estimate_physics",
]
