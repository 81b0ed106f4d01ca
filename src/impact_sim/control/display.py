"""Values the UI layer renders from a simulation session."""
from __future__ import annotations

from dataclasses import dataclass

from impact_sim.core.model import (
    UNAVAILABLE,
    CoordinateSource,
    Failed,
    SimulationSession,
    Unavailable,
)

PLACEHOLDER = "--"


@dataclass(frozen=True)
class DisplayState:
    loading: bool
    error: str | None
    energy_text: str
    latitude: float | str
    longitude: float | str
    coordinate_source: CoordinateSource | None
    impact_probability: float | Unavailable = UNAVAILABLE
    crater_diameter_km: float | Unavailable = UNAVAILABLE
    historical_context: str | Unavailable = UNAVAILABLE
    population_impact: str | Unavailable = UNAVAILABLE

    @property
    def coordinate_text(self) -> str:
        return f"{_fmt(self.latitude)}° / {_fmt(self.longitude)}°"

    def detail_lines(self) -> list[str]:
        lines = []
        if self.impact_probability is not UNAVAILABLE:
            lines.append(f"PROBABILITY: {self.impact_probability:.0%}")
        if self.crater_diameter_km is not UNAVAILABLE:
            lines.append(f"CRATER: {self.crater_diameter_km:.2f} KM")
        if self.population_impact is not UNAVAILABLE:
            lines.append(f"POPULATION: {self.population_impact}")
        if self.historical_context is not UNAVAILABLE:
            lines.append(f"CONTEXT: {self.historical_context}")
        return lines


def _fmt(value: float | str) -> str:
    if isinstance(value, str):
        return value
    return f"{value:.2f}"


def display_state(session: SimulationSession) -> DisplayState:
    state = session.run_state
    error = state.error.message if isinstance(state, Failed) else None
    energy_text = session.estimate.megatons_text if session.estimate is not None else PLACEHOLDER

    coordinate = session.coordinate
    prediction = session.prediction
    if coordinate is None:
        latitude: float | str = PLACEHOLDER
        longitude: float | str = PLACEHOLDER
        source = None
    else:
        latitude, longitude, source = coordinate.latitude, coordinate.longitude, coordinate.source

    if prediction is None:
        return DisplayState(session.loading, error, energy_text, latitude, longitude, source)
    return DisplayState(
        loading=session.loading,
        error=error,
        energy_text=energy_text,
        latitude=latitude,
        longitude=longitude,
        coordinate_source=source,
        impact_probability=prediction.impact_probability,
        crater_diameter_km=prediction.crater_diameter_km,
        historical_context=prediction.historical_context,
        population_impact=prediction.population_impact,
    )


__all__ = ["PLACEHOLDER", "DisplayState", "display_state"]
