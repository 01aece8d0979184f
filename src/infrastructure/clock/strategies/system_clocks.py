# src/infrastructure/clock/strategies/system_clocks.py
import time


class MonotonicClock:
    """
    Clock backed by ``time.monotonic_ns``. Never jumps backwards, so it is the
    preferred source for measuring elapsed animation time.
    """
    def now_millis(self) -> int:
        return time.monotonic_ns() // 1_000_000


class WallClock:
    """
    Clock backed by the system wall time (milliseconds since the epoch).

    Wall time can jump when the system clock is adjusted; a backwards jump
    holds a reel still until the clock catches up. Prefer MonotonicClock for
    animation.
    """
    def now_millis(self) -> int:
        return time.time_ns() // 1_000_000
