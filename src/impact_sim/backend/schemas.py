"""Wire models for the prediction service's ``/predict`` endpoint."""
from __future__ import annotations

import math
import re
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

_LEADING_NUMBER = re.compile(r"^\s*([-+]?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?)")


def _finite_or_none(value: Any) -> Optional[float]:
    """Finite float from a JSON number or a numeric-prefixed string such as ``"2.4 km"``."""

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match is None:
            return None
        value = match.group(1)
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _within(value: Any, lo: float, hi: float) -> Optional[float]:
    number = _finite_or_none(value)
    if number is None or not lo <= number <= hi:
        return None
    return number


class PredictRequest(BaseModel):
    velocity: float = Field(..., description="km/s")
    mass: float = Field(..., description="kg")
    type_meteor: str = "generic"
    year: int = 1950


class ImpactCoordinates(BaseModel):
    lat: Optional[float] = None
    lon: Optional[float] = None

    @field_validator("lat", mode="before")
    @classmethod
    def _latitude(cls, v: Any) -> Optional[float]:
        return _within(v, -90.0, 90.0)

    @field_validator("lon", mode="before")
    @classmethod
    def _longitude(cls, v: Any) -> Optional[float]:
        return _within(v, -180.0, 180.0)


class PredictResponse(ImpactCoordinates):
    """Either shape: nested ``impact_coordinates`` or flat ``lat``/``lon``."""

    impact_coordinates: Optional[ImpactCoordinates] = None
    impact_probability: Optional[float] = None
    crater_size: Optional[float] = Field(None, description="km")
    historical_context: Optional[str] = None
    population_impact: Optional[str] = None

    @field_validator("impact_coordinates", mode="before")
    @classmethod
    def _nested_object(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else None

    @field_validator("impact_probability", mode="before")
    @classmethod
    def _probability(cls, v: Any) -> Optional[float]:
        return _within(v, 0.0, 1.0)

    @field_validator("crater_size", mode="before")
    @classmethod
    def _crater(cls, v: Any) -> Optional[float]:
        return _within(v, 0.0, math.inf)

    @field_validator("historical_context", "population_impact", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) and v.strip() else None


__all__ = ["ImpactCoordinates", "PredictRequest", "PredictResponse"]
