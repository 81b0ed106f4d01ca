"""Run controller: local estimate first, backend refinement second."""
from __future__ import annotations

import asyncio
import logging
import random
from typing import Callable, Protocol

from impact_sim.core.config import PARAMETER_CFG, ParameterCfg
from impact_sim.core.errors import ErrorDetail, PredictionError
from impact_sim.core.model import (
    UNAVAILABLE,
    CoordinateSource,
    Failed,
    ImpactCoordinate,
    PhysicsEstimate,
    PredictionResult,
    RunState,
    Running,
    SimulationParameters,
    SimulationSession,
    Succeeded,
)
from impact_sim.core.physics import estimate_physics

from .display import DisplayState, display_state

logger = logging.getLogger(__name__)

Listener = Callable[[DisplayState], None]


class Predictor(Protocol):
    async def predict(
        self,
        speed_km_s: float,
        mass_kg: float,
        meteor_type: str | None = None,
        impact_year: int | None = None,
    ) -> PredictionResult:
        ...


async def _resolved(state: RunState) -> RunState:
    return state


class RunController:
    """
    Drives one simulation run at a time for a session.

    Every trigger gets a new generation number. Backend results carrying
    an older generation are dropped, so a late answer never overwrites a
    newer run. Triggering while a run is in flight is allowed and simply
    supersedes it; the older request is not aborted.
    """

    def __init__(
        self,
        session: SimulationSession,
        client: Predictor,
        *,
        rng: random.Random | None = None,
        cfg: ParameterCfg = PARAMETER_CFG,
    ) -> None:
        self._session = session
        self._client = client
        self._rng = rng or random.Random()
        self._cfg = cfg
        self._generation = 0
        self._listeners: list[Listener] = []
        self._pending: set[asyncio.Task] = set()

    @property
    def session(self) -> SimulationSession:
        return self._session

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def state(self) -> RunState:
        return self._session.run_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def trigger(self, parameters: SimulationParameters | None = None) -> asyncio.Task:
        snapshot = parameters if parameters is not None else self._session.parameters
        self._generation += 1
        generation = self._generation
        if isinstance(self._session.run_state, Running):
            logger.info("Run %d supersedes in-flight run %d", generation, self._session.run_state.generation)

        loop = asyncio.get_running_loop()
        session = self._session
        try:
            estimate = estimate_physics(snapshot)
        except Exception as exc:
            logger.exception("Local estimate failed for run %d", generation)
            session.estimate = None
            session.coordinate = None
            session.prediction = None
            outcome = self._settle(generation, Failed(generation, ErrorDetail.from_exception(exc)))
            return loop.create_task(_resolved(outcome), name=f"impact-run-{generation}")

        session.estimate = estimate
        session.coordinate = self._local_coordinate()
        session.prediction = None
        session.run_state = Running(generation, snapshot)
        logger.debug("Run %d started: %s -> %s", generation, snapshot, estimate.megatons_text)
        self._publish()

        task = loop.create_task(
            self._refine(generation, snapshot, estimate),
            name=f"impact-run-{generation}",
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def run(self, parameters: SimulationParameters | None = None) -> RunState:
        return await self.trigger(parameters)

    async def aclose(self) -> None:
        close = getattr(self._client, "aclose", None)
        if close is not None:
            await close()

    def _local_coordinate(self) -> ImpactCoordinate:
        decimals = self._cfg.coordinate_decimals
        return ImpactCoordinate(
            latitude=round(self._rng.uniform(-90.0, 90.0), decimals),
            longitude=round(self._rng.uniform(-180.0, 180.0), decimals),
            source=CoordinateSource.LOCAL_ESTIMATE,
        )

    async def _refine(
        self,
        generation: int,
        snapshot: SimulationParameters,
        estimate: PhysicsEstimate,
    ) -> RunState:
        try:
            prediction = await self._client.predict(
                snapshot.speed_km_s,
                estimate.mass_kg,
                snapshot.meteor_type,
                snapshot.impact_year,
            )
        except PredictionError as exc:
            return self._settle(generation, Failed(generation, ErrorDetail.from_exception(exc)))
        except Exception as exc:
            logger.exception("Unexpected failure during run %d", generation)
            return self._settle(generation, Failed(generation, ErrorDetail.from_exception(exc)))
        return self._settle(generation, Succeeded(generation, estimate, prediction))

    def _settle(self, generation: int, outcome: Succeeded | Failed) -> RunState:
        if generation != self._generation:
            logger.debug("Discarding stale result of run %d (current %d)", generation, self._generation)
            return self._session.run_state

        session = self._session
        if isinstance(outcome, Succeeded):
            prediction = outcome.prediction
            if prediction is not None and prediction.coordinates is not UNAVAILABLE:
                session.coordinate = prediction.coordinates
            session.prediction = prediction
        else:
            logger.warning("Run %d failed: %s", generation, outcome.error.message)
        session.run_state = outcome
        self._publish()
        return outcome

    def _publish(self) -> None:
        view = display_state(self._session)
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception:
                logger.exception("Display listener %r failed", listener)


__all__ = ["Listener", "Predictor", "RunController"]
