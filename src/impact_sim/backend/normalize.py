"""Normalisation of the prediction service's response shapes."""
from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError

from impact_sim.core.model import (
    UNAVAILABLE,
    CoordinateSource,
    ImpactCoordinate,
    PredictionResult,
    ResponseShape,
    Unavailable,
)

from .schemas import ImpactCoordinates, PredictResponse

logger = logging.getLogger(__name__)


def _available(value: Optional[Any]) -> Any:
    return UNAVAILABLE if value is None else value


def _coordinate(source: ImpactCoordinates) -> ImpactCoordinate | Unavailable:
    if source.lat is None or source.lon is None:
        logger.warning("Prediction coordinates missing or out of range: %r", source.model_dump())
        return UNAVAILABLE
    return ImpactCoordinate(latitude=source.lat, longitude=source.lon, source=CoordinateSource.BACKEND)


def normalize_prediction(payload: Any) -> PredictionResult:
    """Map any decoded response body onto :class:`PredictionResult`.

    Two shapes are recognised: ``{"impact_coordinates": {"lat", "lon"}}``
    and flat ``{"lat", "lon"}``. Missing fields become ``UNAVAILABLE``.
    """

    try:
        response = PredictResponse.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Prediction payload rejected (%d errors): %r", exc.error_count(), payload)
        return PredictionResult(shape=ResponseShape.UNKNOWN, raw=payload)

    provided = response.model_fields_set
    if response.impact_coordinates is not None:
        shape = ResponseShape.NESTED
        coordinates = _coordinate(response.impact_coordinates)
    elif "lat" in provided or "lon" in provided:
        shape = ResponseShape.FLAT
        coordinates = _coordinate(response)
    else:
        logger.warning("Prediction payload has no impact coordinates")
        shape = ResponseShape.UNKNOWN
        coordinates = UNAVAILABLE

    return PredictionResult(
        coordinates=coordinates,
        impact_probability=_available(response.impact_probability),
        crater_diameter_km=_available(response.crater_size),
        historical_context=_available(response.historical_context),
        population_impact=_available(response.population_impact),
        shape=shape,
        raw=payload,
    )


__all__ = ["normalize_prediction"]
