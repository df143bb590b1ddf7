"""Daily trigger that runs the scheduled-transaction sweep."""

import logging
import threading
from datetime import datetime, time, timedelta
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class DailySweepTrigger:
    """Call ``sweep(now)`` once a day at ``run_at`` until stopped.

    The trigger knows nothing about what the sweep does. A failed sweep is
    logged and the next day's run still happens.
    """

    def __init__(
        self,
        sweep: Callable[[datetime], object],
        run_at: time = time(0, 0),
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.sweep = sweep
        self.run_at = run_at
        self.clock = clock
        self._stop = threading.Event()

    def next_run_after(self, now: datetime) -> datetime:
        """First ``run_at`` instant strictly after ``now``."""
        candidate = datetime.combine(now.date(), self.run_at)
        if candidate <= now:
            candidate += timedelta(days=1)
        return candidate

    def run_once(self) -> Optional[object]:
        """Run one sweep now. Returns its result, or None if it failed."""
        now = self.clock()
        try:
            return self.sweep(now)
        except Exception:
            logger.exception("Scheduled sweep at %s failed", now)
            return None

    def run_forever(self) -> None:
        """Block, sweeping once per day, until ``stop()`` is called."""
        logger.info("Daily sweep trigger started; runs at %s", self.run_at.strftime("%H:%M"))
        while not self._stop.is_set():
            now = self.clock()
            next_run = self.next_run_after(now)
            wait_seconds = max((next_run - now).total_seconds(), 0)
            logger.debug("Next sweep at %s (in %.0f s)", next_run, wait_seconds)
            if self._stop.wait(wait_seconds):
                break
            self.run_once()
        logger.info("Daily sweep trigger stopped")

    def stop(self) -> None:
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()
