# src/domain/reel/factories/positioner_factory.py
import logging
from typing import Dict, Any, Optional

from src.domain.events.event_dispatcher import EventDispatcher
from src.infrastructure.clock.clock_provider import ClockProvider
from src.infrastructure.clock.strategies.clock_strategy import ClockStrategy
from src.infrastructure.rng.rng_provider import RNGProvider

from ..entities.reel_positioner import (
    AdvancePolicy, ReelPositioner, DEFAULT_SYMBOL_SIZE
)
from ..exceptions import InvalidConfiguration


class PositionerFactory:
    """
    Factory for creating started ReelPositioner instances from configuration.
    """
    def __init__(self, rng_provider: Optional[RNGProvider] = None,
                 clock_provider: Optional[ClockProvider] = None,
                 event_dispatcher: Optional[EventDispatcher] = None):
        """
        Initialize the positioner factory.

        Args:
            rng_provider: RNG provider used for random start positions
            clock_provider: Provider resolving the configured clock
            event_dispatcher: Optional dispatcher handed to every positioner
        """
        self.logger = logging.getLogger("domain.reel.factory")
        self.rng_provider = rng_provider or RNGProvider()
        self.clock_provider = clock_provider or ClockProvider()
        self.event_dispatcher = event_dispatcher

    def create_positioner(self, config: Dict[str, Any],
                          clock: Optional[ClockStrategy] = None) -> ReelPositioner:
        """
        Create a positioner and start it with the configured reel.

        Args:
            config: Configuration with a ``reel`` section and optional
                ``clock`` and ``rng`` sections
            clock: Explicit clock, overrides the configured one

        Returns:
            Started ReelPositioner

        Raises:
            InvalidConfiguration: If the reel parameters are rejected
            ValueError: If the clock, RNG strategy or advance policy is unknown
        """
        reel_config = config.get("reel") or {}
        reel_id = reel_config.get("id", "")
        reelset = reel_config.get("reelset", "")

        if clock is None:
            clock = self.clock_provider.get_clock(config.get("clock", "monotonic"))

        policy = AdvancePolicy(reel_config.get("advance_policy", AdvancePolicy.SINGLE_STEP.value))

        positioner = ReelPositioner(
            clock=clock,
            symbol_size=reel_config.get("symbol_size", DEFAULT_SYMBOL_SIZE),
            policy=policy,
            event_dispatcher=self.event_dispatcher,
            reel_id=reel_id
        )

        start_position = self._resolve_start_position(
            reel_config.get("start_position", 0), len(reelset), config.get("rng") or {}
        )

        self.logger.info(f"Creating reel positioner: {reel_id or '<unnamed>'} ({policy.value})")
        positioner.initialize(start_position, reelset, reel_config.get("speed_ms", 200))
        return positioner

    def _resolve_start_position(self, start_position, reel_length: int,
                                rng_config: Dict[str, Any]) -> int:
        """Turn the configured start position into an index, drawing one if "random"."""
        if start_position != "random":
            return start_position

        if reel_length == 0:
            raise InvalidConfiguration(
                "symbols", "", "The reelset is empty. Please initialize it and try again")

        rng = self.rng_provider.create_from_config(rng_config)
        position = rng.get_random_int(0, reel_length - 1)
        self.logger.debug(f"Drew random start position {position} of {reel_length}")
        return position
