# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Archiver, a simulated long-running contact export.

A run advances progress in ``steps`` ticks separated by random delays of
up to ``time_unit`` seconds, settles for one ``time_unit`` and completes.
Each run owns a cancellation token (a ``threading.Event``). ``reset()``
sets the token; the worker notices at its next checkpoint (or wakes early
from its wait), so cancellation latency is at most one ``time_unit``.

Every state write made by the worker is a compare-and-swap against its
own token, so once ``reset()`` returns a cancelled run can never move the
archiver to Complete or touch the progress of a newer run.
"""

import random
import threading
from enum import Enum
from pathlib import Path
from typing import Optional

from contacts_app.core.config import settings
from contacts_app.core.logging import get_logger
from contacts_app.metrics.prometheus import ARCHIVE_PROGRESS, ARCHIVE_RUNS
from contacts_app.schemas.contact import ArchiveSnapshot

logger = get_logger(__name__)


class ArchiveStatus(str, Enum):
    WAITING = "Waiting"
    RUNNING = "Running"
    COMPLETE = "Complete"


class Archiver:
    """Thread-safe handle on the background archive job."""

    def __init__(
        self,
        archive_path: str | Path,
        steps: int = settings.ARCHIVE_STEPS,
        time_unit: float = settings.ARCHIVE_TIME_UNIT,
        rng: Optional[random.Random] = None,
    ) -> None:
        if steps < 1:
            raise ValueError("steps must be >= 1")
        self._archive_path = Path(archive_path)
        self._steps = steps
        self._time_unit = time_unit
        self._random = rng or random.Random()
        self._lock = threading.Lock()
        self._status = ArchiveStatus.WAITING
        self._progress = 0.0
        self._token: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    # ── Queries ──

    def status(self) -> ArchiveStatus:
        with self._lock:
            return self._status

    def progress(self) -> float:
        with self._lock:
            return self._progress

    def progress_percentage(self) -> float:
        return self.progress() * 100

    def snapshot(self) -> ArchiveSnapshot:
        """Status and progress read under one lock acquisition."""
        with self._lock:
            return ArchiveSnapshot(
                status=self._status.value,
                progress=self._progress,
                archive_file=self._archive_path.name,
            )

    def archive_file(self) -> str:
        return self._archive_path.name

    def archive_path(self) -> Path:
        return self._archive_path

    # ── Commands ──

    def start(self) -> None:
        """Begin a run if Waiting; no-op while Running or Complete."""
        with self._lock:
            if self._status is not ArchiveStatus.WAITING:
                return
            self._status = ArchiveStatus.RUNNING
            self._progress = 0.0
            ARCHIVE_PROGRESS.set(0)
            token = threading.Event()
            self._token = token
            self._thread = threading.Thread(
                target=self._run, args=(token,), name="archiver", daemon=True
            )
            self._thread.start()

        ARCHIVE_RUNS.labels(outcome="started").inc()
        logger.info("Archive started: steps=%d, time_unit=%.3fs", self._steps, self._time_unit)

    def reset(self) -> None:
        """Force Waiting and cancel any in-flight run. Progress is left as is."""
        with self._lock:
            previous = self._status
            self._status = ArchiveStatus.WAITING
            if self._token is not None:
                self._token.set()
            self._token = None

        if previous is ArchiveStatus.RUNNING:
            ARCHIVE_RUNS.labels(outcome="cancelled").inc()
        logger.info("Archive reset: previous_status=%s", previous.value)

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the current worker thread. True when no worker is alive."""
        with self._lock:
            thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    # ── Worker ──

    def _owns(self, token: threading.Event) -> bool:
        # caller holds self._lock
        return (
            self._token is token
            and not token.is_set()
            and self._status is ArchiveStatus.RUNNING
        )

    def _run(self, token: threading.Event) -> None:
        for step in range(1, self._steps + 1):
            if token.wait(self._random.uniform(0, self._time_unit)):
                logger.info("Archive run abandoned at step %d", step)
                return
            with self._lock:
                if not self._owns(token):
                    logger.info("Archive run abandoned at step %d", step)
                    return
                self._progress = step / self._steps
                progress = self._progress
                ARCHIVE_PROGRESS.set(progress)
            logger.debug("Archive progress: %.2f", progress)

        if token.wait(self._time_unit):
            logger.info("Archive run abandoned before completion")
            return
        with self._lock:
            if not self._owns(token):
                logger.info("Archive run abandoned before completion")
                return
            self._status = ArchiveStatus.COMPLETE

        ARCHIVE_RUNS.labels(outcome="completed").inc()
        logger.info("Archive complete: file=%s", self._archive_path.name)
