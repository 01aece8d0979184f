# src/domain/reel/entities/reel_state.py
from dataclasses import dataclass, replace
from typing import Dict, Any

from .reel import Reel


@dataclass(frozen=True)
class ReelState:
    """
    Immutable snapshot of a running reel.

    A positioner never edits a snapshot in place; starting the reel and every
    discrete advance produce a new one, so index, reelset, speed and timestamp
    always change together.
    """
    index: int
    reel: Reel
    speed_millis: int
    last_advance_time: int

    def with_advance(self, steps: int, now: int) -> "ReelState":
        """
        Build the snapshot that follows moving the reel down by ``steps`` symbols.

        Args:
            steps: Number of symbols the reel moved
            now: Timestamp (ms) to record as the last advance

        Returns:
            New ReelState; the previous symbol becomes the first one
        """
        new_index = (self.index - steps) % self.reel.length
        return replace(self, index=new_index, last_advance_time=now)

    def elapsed(self, now: int) -> int:
        """Milliseconds since the last advance, never negative if the clock stepped back."""
        return max(now - self.last_advance_time, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "reelset": "".join(self.reel.symbols),
            "speed_millis": self.speed_millis,
            "last_advance_time": self.last_advance_time,
        }
