# src/infrastructure/clock/strategies/clock_strategy.py
from typing import Protocol


class ClockStrategy(Protocol):
    """Protocol defining the interface for millisecond clocks."""

    def now_millis(self) -> int:
        """
        Get the current time.

        Returns:
            Current time in whole milliseconds
        """
        ...
