"""Per-frame orbit animation loop."""
from __future__ import annotations

import asyncio
import logging
from typing import Callable

from impact_sim.core.config import ORBIT_CFG, SCHEDULER_CFG, OrbitCfg, SchedulerCfg
from impact_sim.core.errors import RenderTargetUnavailable
from impact_sim.core.kinematics import animation_state
from impact_sim.core.model import OrbitAnimationState, SimulationSession
from impact_sim.core.scene import RenderTarget, build_scene
from impact_sim.core.timekeeping import SimulationClock

logger = logging.getLogger(__name__)

TargetProvider = Callable[[], "RenderTarget | None"]


class MountGuard:
    """Waits for the rendering target with a bounded number of attempts."""

    def __init__(
        self,
        provider: TargetProvider,
        *,
        max_attempts: int = SCHEDULER_CFG.mount_max_attempts,
        initial_delay: float = SCHEDULER_CFG.mount_initial_delay,
        backoff: float = SCHEDULER_CFG.mount_backoff,
        max_delay: float = SCHEDULER_CFG.mount_max_delay,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._provider = provider
        self._max_attempts = max_attempts
        self._initial_delay = initial_delay
        self._backoff = backoff
        self._max_delay = max_delay
        self.attempts = 0

    @classmethod
    def from_cfg(cls, provider: TargetProvider, cfg: SchedulerCfg = SCHEDULER_CFG) -> "MountGuard":
        return cls(
            provider,
            max_attempts=cfg.mount_max_attempts,
            initial_delay=cfg.mount_initial_delay,
            backoff=cfg.mount_backoff,
            max_delay=cfg.mount_max_delay,
        )

    async def acquire(self) -> RenderTarget:
        delay = self._initial_delay
        for attempt in range(1, self._max_attempts + 1):
            self.attempts = attempt
            target = self._provider()
            if target is not None:
                return target
            if attempt < self._max_attempts:
                logger.debug("Render target not ready (attempt %d), retrying in %.2fs", attempt, delay)
                await asyncio.sleep(delay)
                delay = min(delay * self._backoff, self._max_delay)
        raise RenderTargetUnavailable(f"Render target not ready after {self._max_attempts} attempts")


class AnimationScheduler:
    """
    Recomputes the orbit pose once per frame and hands it to the target.

    The loop never waits on the run controller. After :meth:`stop` no tick
    reaches a target and teardown callbacks have run exactly once.
    """

    def __init__(
        self,
        session: SimulationSession,
        provider: TargetProvider,
        *,
        clock: SimulationClock | None = None,
        cfg: SchedulerCfg = SCHEDULER_CFG,
        orbit_cfg: OrbitCfg = ORBIT_CFG,
        guard: MountGuard | None = None,
    ) -> None:
        self._session = session
        self._clock = clock or SimulationClock()
        self._cfg = cfg
        self._orbit_cfg = orbit_cfg
        self._guard = guard or MountGuard.from_cfg(provider, cfg)
        self._target: RenderTarget | None = None
        self._task: asyncio.Task | None = None
        self._stopped = False
        self._teardowns: list[Callable[[], None]] = []

    @property
    def clock(self) -> SimulationClock:
        return self._clock

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done() and not self._stopped

    @property
    def stopped(self) -> bool:
        return self._stopped

    def add_teardown(self, callback: Callable[[], None]) -> None:
        """Register cleanup (e.g. input listeners) to run on :meth:`stop`."""

        if self._stopped:
            callback()
            return
        self._teardowns.append(callback)

    def start(self) -> asyncio.Task:
        if self._stopped:
            raise RuntimeError("Scheduler has been stopped")
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._run(), name="orbit-animation")
        return self._task

    def tick(self) -> OrbitAnimationState | None:
        target = self._target
        if self._stopped or target is None:
            return None
        parameters = self._session.parameters
        state = animation_state(self._clock.advance(), parameters, self._orbit_cfg)
        self._session.animation = state
        target.apply_scene(build_scene(state, self._orbit_cfg))
        return state

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        self._target = None
        task = self._task
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
        teardowns, self._teardowns = self._teardowns, []
        for callback in teardowns:
            try:
                callback()
            except Exception:
                logger.exception("Teardown callback %r failed", callback)
        logger.debug("Animation scheduler stopped")

    async def aclose(self) -> None:
        self.stop()
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        try:
            target = await self._guard.acquire()
        except RenderTargetUnavailable as exc:
            logger.error("%s; animation disabled", exc)
            self.stop()
            return
        if self._stopped:
            return
        self._target = target
        logger.debug("Render target ready after %d attempt(s)", self._guard.attempts)

        while not self._stopped:
            try:
                self.tick()
            except Exception:
                logger.exception("Animation tick failed; stopping scheduler")
                self.stop()
                return
            await asyncio.sleep(self._cfg.frame_interval)


__all__ = ["AnimationScheduler", "MountGuard", "TargetProvider"]
