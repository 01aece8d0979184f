# src/infrastructure/clock/clock_provider.py
import logging
from typing import Dict

from .strategies.clock_strategy import ClockStrategy
from .strategies.manual_clock import ManualClock
from .strategies.system_clocks import MonotonicClock, WallClock


class ClockProvider:
    """
    Factory for clock strategies.
    """
    def __init__(self):
        """Initialize the clock provider."""
        self.logger = logging.getLogger(__name__)

    def get_clock(self, clock_name: str = "monotonic") -> ClockStrategy:
        """
        Create a clock strategy by name.

        Args:
            clock_name: Name of the clock ("monotonic", "wall", "manual")

        Returns:
            A new clock strategy instance

        Raises:
            ValueError: If the clock name is unknown
        """
        clock_name = clock_name.lower()

        if clock_name == "monotonic":
            return MonotonicClock()
        elif clock_name == "wall":
            return WallClock()
        elif clock_name == "manual":
            self.logger.debug("Creating manual clock; time only moves when advanced")
            return ManualClock()
        else:
            self.logger.error(f"Unknown clock: {clock_name}")
            raise ValueError(f"Unknown clock: {clock_name}")

    @staticmethod
    def get_available_clocks() -> Dict[str, str]:
        """
        Get a dictionary of available clocks with descriptions.

        Returns:
            Dictionary mapping clock names to descriptions
        """
        return {
            "monotonic": "Monotonic system clock (default, immune to wall time changes)",
            "wall": "System wall clock in milliseconds since the epoch",
            "manual": "Deterministic clock advanced explicitly (simulation and tests)"
        }
