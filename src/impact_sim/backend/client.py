"""HTTP client for the remote impact prediction service."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from impact_sim.core.config import BACKEND_CFG, BackendCfg
from impact_sim.core.errors import NetworkError, ProtocolError, ResponseShapeError
from impact_sim.core.model import PredictionResult
from impact_sim.core.physics import coerce_float

from .normalize import normalize_prediction
from .schemas import PredictRequest

logger = logging.getLogger(__name__)


def build_payload(
    velocity: object,
    mass: object,
    meteor_type: object = None,
    year: object = None,
    cfg: BackendCfg = BACKEND_CFG,
) -> dict[str, Any]:
    """
    Request body for ``POST /predict``.

    Malformed numbers are sent as 0 and an unparsable year as the default
    year, so a bad slider value never blocks a run. Each coercion is logged.
    """
    if isinstance(meteor_type, str) and meteor_type.strip():
        type_meteor = meteor_type.strip()
    else:
        type_meteor = cfg.default_meteor_type
    if year is None:
        year = cfg.default_year
    request = PredictRequest(
        velocity=coerce_float(velocity, "velocity"),
        mass=coerce_float(mass, "mass"),
        type_meteor=type_meteor,
        year=int(coerce_float(year, "year", default=cfg.default_year)),
    )
    return request.model_dump()


class PredictionClient:
    """
    Issues one prediction request per run.

    With the default configuration there is no timeout and no retry: a
    slow or failed call surfaces directly to the caller. ``cfg.timeout``
    and ``cfg.retries`` opt into a bounded timeout and retries on
    transport failures.
    """

    def __init__(
        self,
        cfg: BackendCfg = BACKEND_CFG,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._cfg = cfg
        self._client = httpx.AsyncClient(
            base_url=cfg.base_url,
            timeout=httpx.Timeout(cfg.timeout),
            transport=transport,
        )

    @property
    def cfg(self) -> BackendCfg:
        return self._cfg

    async def predict(
        self,
        speed_km_s: float,
        mass_kg: float,
        meteor_type: str | None = None,
        impact_year: int | None = None,
    ) -> PredictionResult:
        payload = build_payload(speed_km_s, mass_kg, meteor_type, impact_year, self._cfg)
        response = await self._post(payload)

        if not response.is_success:
            logger.warning("Prediction request failed with HTTP %s", response.status_code)
            raise ProtocolError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as exc:
            raise ResponseShapeError("Prediction response is not valid JSON", response.text) from exc
        return normalize_prediction(data)

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        attempts = 1 + max(0, self._cfg.retries)
        for attempt in range(1, attempts + 1):
            try:
                return await self._client.post(
                    self._cfg.predict_path,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
            except httpx.TransportError as exc:
                if attempt < attempts:
                    logger.warning("Prediction request attempt %d/%d failed: %s", attempt, attempts, exc)
                    continue
                logger.error("Prediction request could not be completed: %s", exc)
                raise NetworkError(str(exc) or exc.__class__.__name__) from exc
        raise AssertionError("unreachable")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "PredictionClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = ["PredictionClient", "build_payload"]
