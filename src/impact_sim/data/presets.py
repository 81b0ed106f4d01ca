"""Preset impactors selectable from the simulator window."""
from __future__ import annotations

from dataclasses import dataclass

from impact_sim.core.model import SimulationParameters


METEOR_TYPES: tuple[str, ...] = ("generic", "stony", "iron", "carbonaceous")


@dataclass(frozen=True)
class Preset:
    key: str
    name: str
    parameters: SimulationParameters
    description: str


PRESET_DEFINITIONS: tuple[Preset, ...] = (
    Preset(
        key="default",
        name="Default",
        parameters=SimulationParameters(),
        description="100 m generic body at 20 km/s, 45° inclination.",
    ),
    Preset(
        key="tunguska",
        name="Tunguska-like",
        parameters=SimulationParameters(
            diameter_m=60.0,
            speed_km_s=27.0,
            inclination_deg=30.0,
            impact_year=1908,
            meteor_type="stony",
        ),
        description="Stony airburst-class body (~60 m, 27 km/s).",
    ),
    Preset(
        key="iron",
        name="Iron Impactor",
        parameters=SimulationParameters(
            diameter_m=40.0,
            speed_km_s=12.0,
            inclination_deg=60.0,
            impact_year=1947,
            meteor_type="iron",
        ),
        description="Small, slow metallic body (~40 m, 12 km/s).",
    ),
    Preset(
        key="regional",
        name="Regional Threat",
        parameters=SimulationParameters(
            diameter_m=500.0,
            speed_km_s=25.0,
            inclination_deg=15.0,
            impact_year=2000,
            meteor_type="carbonaceous",
        ),
        description="Largest body the sliders allow (~500 m, 25 km/s).",
    ),
)

PRESETS: dict[str, Preset] = {preset.key: preset for preset in PRESET_DEFINITIONS}
PRESET_DISPLAY_ORDER: list[str] = [preset.key for preset in PRESET_DEFINITIONS]
DEFAULT_PRESET_KEY = PRESET_DISPLAY_ORDER[0]


__all__ = [
    "DEFAULT_PRESET_KEY",
    "METEOR_TYPES",
    "PRESET_DEFINITIONS",
    "PRESET_DISPLAY_ORDER",
    "PRESETS",
    "Preset",
]
