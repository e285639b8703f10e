"""Цикл мониторинга миграций.

Раз в ``poll_interval_sec`` забирает новые токены из фида и прогоняет каждый
через EvaluationPipeline. Любая ошибка (фид, отдельный токен, что угодно ещё)
логируется и лишь сокращает паузу до ``fast_retry_interval_sec``; процесс
из-за неё не останавливается.
"""

from __future__ import annotations

import asyncio
import contextlib
import enum
from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger

from config.settings import MonitorSettings
from ..contracts import FeedClient
from .pipeline import EvaluationPipeline
from .types import EvaluationOutcome, utcnow


class LoopState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    BACKOFF_RECOVERING = "backoff_recovering"
    STOPPED = "stopped"


@dataclass(slots=True)
class LoopController:
    """Явное состояние цикла (вместо глобальных флагов)."""

    state: LoopState = LoopState.IDLE
    current_address: str | None = None
    cycles: int = 0
    failed_cycles: int = 0
    candidates_seen: int = 0
    outcomes: dict[str, int] = field(default_factory=dict)
    last_cycle_at: datetime | None = None
    last_error: str | None = None
    stop_event: asyncio.Event = field(default_factory=asyncio.Event)

    @property
    def stopping(self) -> bool:
        return self.stop_event.is_set()

    def record(self, outcome: EvaluationOutcome) -> None:
        self.outcomes[outcome.value] = self.outcomes.get(outcome.value, 0) + 1

    def snapshot(self) -> dict[str, object]:
        return {
            "state": self.state.value,
            "current_address": self.current_address,
            "cycles": self.cycles,
            "failed_cycles": self.failed_cycles,
            "candidates_seen": self.candidates_seen,
            "outcomes": dict(self.outcomes),
            "last_cycle_at": self.last_cycle_at,
            "last_error": self.last_error,
        }


class MonitoringLoop:
    def __init__(
        self,
        feed: FeedClient,
        pipeline: EvaluationPipeline,
        settings: MonitorSettings,
        controller: LoopController | None = None,
    ) -> None:
        self._feed = feed
        self._pipeline = pipeline
        self._settings = settings
        self.controller = controller or LoopController()
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Запускает цикл фоновой задачей (повторный вызов ничего не делает)."""

        if self._task and not self._task.done():
            return
        self.controller.stop_event.clear()
        self._task = asyncio.create_task(self.run(), name="migration-monitor")
        logger.info("Мониторинг миграций запущен")

    async def stop(self, grace: float | None = None) -> None:
        """Просит цикл остановиться и ждёт текущий цикл не дольше ``grace`` секунд."""

        self.controller.stop_event.set()
        task, self._task = self._task, None
        if task is None or task.done():
            self.controller.state = LoopState.STOPPED
            return
        timeout = self._settings.shutdown_grace_sec if grace is None else grace
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Цикл не завершился за {timeout}s, прерываем токен {addr}",
                timeout=timeout,
                addr=self.controller.current_address,
            )
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self.controller.state = LoopState.STOPPED
        self.controller.current_address = None
        logger.info("Мониторинг миграций остановлен")

    async def run(self) -> None:
        controller = self.controller
        controller.state = LoopState.RUNNING
        while not controller.stopping:
            try:
                clean = await self.run_cycle()
            except Exception as exc:  # noqa: BLE001
                logger.exception("Ошибка в цикле мониторинга: {error}", error=exc)
                controller.last_error = str(exc)
                clean = False
            if clean:
                controller.state = LoopState.RUNNING
                delay = self._settings.poll_interval_sec
            else:
                controller.state = LoopState.BACKOFF_RECOVERING
                controller.failed_cycles += 1
                delay = self._settings.fast_retry_interval_sec
            await self._sleep(delay)
        controller.state = LoopState.STOPPED

    async def run_cycle(self) -> bool:
        """Один проход: фид → оценка каждого токена по порядку. True, если без ошибок."""

        controller = self.controller
        controller.cycles += 1
        controller.last_cycle_at = utcnow()
        try:
            candidates = await self._feed.fetch_new_candidates()
        except Exception as exc:  # noqa: BLE001
            logger.error("Не удалось получить новые токены: {error}", error=exc)
            controller.last_error = f"feed: {exc}"
            return False

        logger.debug("Цикл #{n}: {count} новых токенов", n=controller.cycles, count=len(candidates))
        clean = True
        for candidate in candidates:
            if controller.stopping:
                break
            controller.current_address = candidate.address
            controller.candidates_seen += 1
            try:
                result = await self._pipeline.evaluate(candidate)
            except Exception as exc:  # noqa: BLE001
                logger.exception(
                    "Ошибка оценки токена {addr}: {error}",
                    addr=candidate.address,
                    error=exc,
                )
                controller.last_error = f"{candidate.address}: {exc}"
                clean = False
                continue
            finally:
                controller.current_address = None
            controller.record(result.outcome)
        return clean

    async def _sleep(self, delay: float) -> None:
        # stop_event прерывает паузу
        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(self.controller.stop_event.wait(), timeout=delay)


__all__ = ["LoopController", "LoopState", "MonitoringLoop"]
