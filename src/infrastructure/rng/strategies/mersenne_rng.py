# src/infrastructure/rng/strategies/mersenne_rng.py
import random
from typing import Optional


class MersenneTwisterRNG:
    """
    Random number generator using the Mersenne Twister algorithm (Python's default).
    """
    def __init__(self, seed_value: Optional[int] = None):
        # Dedicated instance so reels never share the global random state
        self._random = random.Random()

        if seed_value is not None:
            self.seed(seed_value)

    def get_random_int(self, min_val: int, max_val: int) -> int:
        """Random integer in [min_val, max_val]."""
        return self._random.randint(min_val, max_val)

    def seed(self, seed_value: int) -> None:
        self._random.seed(seed_value)
