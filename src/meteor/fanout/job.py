# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Concurrent fan-out of independent units of work.

``AsyncJob`` runs every doer on its own thread and drains their results in arrival
order until the target count is reached or a stop is signalled. Stopping is a single
broadcast: the first stop reason offered to a capacity-1 queue wins, a moderator thread
records it and sets the stop event, and every worker checks that event before starting
and before publishing. A worker already inside ``do()`` is not interrupted; its result
is dropped.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Sequence
from typing import Any, Protocol

from ..config import AsyncSettings, load_async_settings

logger = logging.getLogger(__name__)

AUTO_STOPPED = "asyncAutoStopped"
WORKERS_EXHAUSTED = "asyncWorkersExhausted"
RESTARTED = "asyncRestarted"


class AsyncDoer(Protocol):
    """One unit of fan-out work."""

    def prepare(self, index: int) -> None:
        """Set up for the work at position ``index``."""
        ...

    def do(self) -> Any:
        """Do the (blocking) work and return its result."""
        ...

    def to_stop(self) -> str:
        """Return a non-empty reason to stop the whole job, or ``""`` to carry on."""
        ...


def new_async_doers(*doers: AsyncDoer) -> list[AsyncDoer]:
    return list(doers)


class _Generation:
    """Stop machinery and result queue for one run of a job."""

    def __init__(self, target_count: int, worker_count: int):
        self.results: queue.Queue[Any] = queue.Queue(maxsize=max(target_count, 1))
        self.stop = threading.Event()
        self.reasons: queue.Queue[str] = queue.Queue(maxsize=1)
        self.stopped_by: str | None = None
        self.closed = False
        self.responses: list[Any] = []
        self.responses_lock = threading.Lock()
        self._pending = worker_count
        self._pending_lock = threading.Lock()

    def offer_stop(self, reason: str) -> bool:
        """Offer a stop reason; only the first offer is kept."""
        try:
            self.reasons.put_nowait(reason)
        except queue.Full:
            return False
        return True

    def worker_finished(self) -> None:
        with self._pending_lock:
            self._pending -= 1

    def workers_done(self) -> bool:
        with self._pending_lock:
            return self._pending <= 0


class AsyncJob:
    """
    Fan-out job over ``doers``.

    ``target_count`` defaults to ``len(doers)`` (also when given as 0). A job is meant
    to be run once; ``restart()`` re-arms a fresh generation for deliberate reuse.
    """

    def __init__(
        self,
        doers: Sequence[AsyncDoer],
        target_count: int = 0,
        *,
        settings: AsyncSettings | None = None,
    ):
        if target_count < 0:
            raise ValueError(f"target_count must be >= 0, got {target_count}")
        self._doers = list(doers)
        self.target_count = target_count or len(self._doers)
        self.settings = settings or load_async_settings()
        self._gen = self._arm()

    @property
    def stopped_by(self) -> str | None:
        """Reason recorded by the moderator, ``None`` while the job is running."""
        return self._gen.stopped_by

    def is_closed(self) -> bool:
        return self._gen.closed

    def _arm(self) -> _Generation:
        gen = _Generation(self.target_count, len(self._doers))
        moderator = threading.Thread(
            target=self._moderate,
            args=(gen,),
            name="meteor-async-moderator",
            daemon=True,
        )
        moderator.start()
        return gen

    @staticmethod
    def _moderate(gen: _Generation) -> None:
        reason = gen.reasons.get()
        gen.stopped_by = reason
        gen.closed = True
        gen.stop.set()
        logger.debug("Async job stopped: %s", reason)

    def stop(self, reason: str) -> bool:
        """Ask the current run to stop; returns False if another reason got there first."""
        if not reason:
            raise ValueError("stop reason must be a non-empty string")
        return self._gen.offer_stop(reason)

    def restart(self) -> None:
        """
        Re-arm the job: fresh stop event, stop-reason queue, result queue and
        collected results, with a new moderator. Workers still running from the
        previous run see that run stopped and drop their results.
        """
        self._gen.offer_stop(RESTARTED)
        self._gen = self._arm()

    def _work(self, gen: _Generation, index: int, doer: AsyncDoer) -> None:
        try:
            if gen.stop.is_set():
                logger.debug("Worker %d skipped: job already stopped", index)
                return

            try:
                doer.prepare(index)
                value = doer.do()
            except Exception as exc:  # noqa: BLE001
                logger.warning("Worker %d failed: %s", index, exc)
                value = exc

            try:
                reason = doer.to_stop()
            except Exception as exc:  # noqa: BLE001
                logger.warning("Worker %d failed to report a stop reason: %s", index, exc)
                value, reason = exc, ""
            if reason:
                if gen.offer_stop(reason):
                    logger.debug("Worker %d requested stop: %s", index, reason)
                return

            while not gen.stop.is_set():
                try:
                    gen.results.put(value, timeout=self.settings.poll_interval)
                    return
                except queue.Full:
                    continue
            logger.debug("Worker %d result dropped: job stopped", index)
        finally:
            gen.worker_finished()

    def _finish(self, gen: _Generation, reason: str) -> list[Any]:
        gen.offer_stop(reason)
        gen.stop.wait()
        return self._collected(gen)

    def do(self) -> list[Any]:
        """
        Run every doer concurrently and return the results collected in arrival order.

        Returns as soon as the target count is reached or a stop is signalled, without
        waiting for slower workers. Never raises for worker outcomes: the result may be
        partial or empty.
        """
        gen = self._gen
        if not self._doers:
            return self._finish(gen, AUTO_STOPPED)

        for index, doer in enumerate(self._doers):
            worker = threading.Thread(
                target=self._work,
                args=(gen, index, doer),
                name=f"meteor-async-worker-{index}",
                daemon=True,
            )
            worker.start()

        while True:
            if gen.stop.is_set():
                return self._collected(gen)

            try:
                value = gen.results.get(timeout=self.settings.poll_interval)
            except queue.Empty:
                # every worker finished without filling the target
                if gen.workers_done() and gen.results.empty():
                    return self._finish(gen, WORKERS_EXHAUSTED)
                continue

            with gen.responses_lock:
                gen.responses.append(value)
                collected = len(gen.responses)
            if collected >= self.target_count:
                return self._finish(gen, AUTO_STOPPED)

    def get_responses(self) -> list[Any]:
        """Results collected so far (a copy); safe to call while ``do()`` runs."""
        return self._collected(self._gen)

    @staticmethod
    def _collected(gen: _Generation) -> list[Any]:
        with gen.responses_lock:
            return list(gen.responses)


__all__ = [
    "AUTO_STOPPED",
    "AsyncDoer",
    "AsyncJob",
    "RESTARTED",
    "WORKERS_EXHAUSTED",
    "new_async_doers",
]
