# src/infrastructure/clock/strategies/manual_clock.py


class ManualClock:
    """
    Deterministic clock that only moves when told to.

    Used for simulated traces and tests, where the polling cadence is
    replayed without sleeping.
    """
    def __init__(self, start_millis: int = 1):
        """
        Initialize the clock.

        Args:
            start_millis: Initial reading in milliseconds
        """
        self._now = start_millis

    def now_millis(self) -> int:
        return self._now

    def advance(self, millis: int) -> int:
        """
        Move the clock forward.

        Args:
            millis: Milliseconds to add, must not be negative

        Returns:
            The new reading

        Raises:
            ValueError: If millis is negative
        """
        if millis < 0:
            raise ValueError(f"Cannot move a clock backwards: {millis}")
        self._now += millis
        return self._now

    def set(self, millis: int) -> None:
        self._now = millis
