# src/domain/reel/exceptions.py
from typing import Any


class ReelError(Exception):
    """Base class for errors raised by the reel domain."""
    pass


class InvalidConfiguration(ReelError):
    """Raised when a reel is started with parameters it cannot run with."""
    def __init__(self, parameter: str, value: Any, message: str):
        self.parameter = parameter
        self.value = value
        self.message = f"{message}. Value: {value!r}"
        super().__init__(self.message)
