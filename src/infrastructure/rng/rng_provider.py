# src/infrastructure/rng/rng_provider.py
import logging
from typing import Optional, Dict, Any

from .strategies.mersenne_rng import MersenneTwisterRNG
from .strategies.numpy_rng import NumpyRNG
from .strategies.rng_strategy import RNGStrategy


class RNGProvider:
    """
    Factory for Random Number Generator strategies, used to pick random
    reel stop positions.
    """
    def __init__(self):
        """Initialize the RNG provider."""
        self.logger = logging.getLogger(__name__)
        self._shared = {}  # strategy name -> unseeded shared instance

    def get_rng(self, strategy_name: str, seed: Optional[int] = None) -> RNGStrategy:
        """
        Get a RNG strategy instance by name.

        Unseeded requests share one instance per strategy; seeded requests
        always get a fresh, reproducible one.

        Args:
            strategy_name: Name of the RNG strategy ("mersenne", "numpy")
            seed: Optional seed value for the RNG

        Returns:
            An instance of the requested RNG strategy

        Raises:
            ValueError: If the strategy name is unknown
        """
        strategy_name = strategy_name.lower()
        if seed is None and strategy_name in self._shared:
            return self._shared[strategy_name]

        if strategy_name == "mersenne":
            strategy = MersenneTwisterRNG(seed)
        elif strategy_name == "numpy":
            strategy = NumpyRNG(seed)
        else:
            self.logger.error(f"Unknown RNG strategy: {strategy_name}")
            raise ValueError(f"Unknown RNG strategy: {strategy_name}")

        self.logger.debug(f"Created {strategy_name} RNG with seed: {seed}")
        if seed is None:
            self._shared[strategy_name] = strategy
        return strategy

    def create_from_config(self, config: Dict[str, Any]) -> RNGStrategy:
        """
        Create an RNG strategy from a configuration dictionary.

        Example config:
            {"strategy": "numpy", "seed": 12345}
        """
        return self.get_rng(config.get('strategy', 'mersenne'), config.get('seed'))
