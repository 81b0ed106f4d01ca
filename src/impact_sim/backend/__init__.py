"""Remote prediction service integration."""

from .client import PredictionClient, build_payload
from .normalize import normalize_prediction
from .schemas import ImpactCoordinates, PredictRequest, PredictResponse

__all__ = [
    "ImpactCoordinates",
    "PredictRequest",
    "PredictResponse",
    "PredictionClient",
    "build_payload",
    "normalize_prediction",
]
