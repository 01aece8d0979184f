# src/infrastructure/rng/strategies/numpy_rng.py
import numpy as np
from typing import Optional


class NumpyRNG:
    """
    Random number generator backed by a NumPy ``Generator``.
    """
    def __init__(self, seed_value: Optional[int] = None):
        """
        Initialize the RNG with an optional seed.

        Args:
            seed_value: Optional seed value for reproducible random numbers
        """
        self.rng = np.random.default_rng(seed_value)

    def get_random_int(self, min_val: int, max_val: int) -> int:
        """
        Get a random integer in the range [min_val, max_val].

        Args:
            min_val: Minimum value (inclusive)
            max_val: Maximum value (inclusive)

        Returns:
            Random integer in the specified range
        """
        # integers() excludes the upper bound unless endpoint is set
        return int(self.rng.integers(min_val, max_val, endpoint=True))

    def seed(self, seed_value: int) -> None:
        self.rng = np.random.default_rng(seed_value)
