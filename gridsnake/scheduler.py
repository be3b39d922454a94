"""
scheduler.py — Tick timer.

Stands in for the browser's setInterval: the controller feeds it the
elapsed frame time and it answers how many engine ticks are due. It knows
nothing about the engine; the controller re-arms it with set_interval()
whenever a tick report says the speed changed.
"""


class TickScheduler:
    """Fixed-interval tick accumulator with start/stop/change-interval."""

    def __init__(self, interval_ms: int) -> None:
        self._interval = self._check(interval_ms)
        self._elapsed: float = 0.0
        self.running: bool = False

    @property
    def interval(self) -> int:
        return self._interval

    def start(self) -> None:
        self.running = True

    def stop(self) -> None:
        """Stop ticking. Time already accumulated is discarded."""
        self.running = False
        self._elapsed = 0.0

    def set_interval(self, interval_ms: int) -> None:
        """Change the tick interval; the next tick is a full new interval away."""
        self._interval = self._check(interval_ms)
        self._elapsed = 0.0

    def advance(self, dt_ms: float) -> int:
        """Add ``dt_ms`` of wall time; return the number of ticks now due."""
        if not self.running:
            return 0
        self._elapsed += dt_ms
        due = int(self._elapsed // self._interval)
        self._elapsed -= due * self._interval
        return due

    @staticmethod
    def _check(interval_ms: int) -> int:
        if interval_ms <= 0:
            raise ValueError(f"tick interval must be positive, got {interval_ms}")
        return interval_ms
