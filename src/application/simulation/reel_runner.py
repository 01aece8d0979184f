# src/application/simulation/reel_runner.py
import logging
import time
from dataclasses import dataclass, asdict
from typing import Dict, Any, List

from src.domain.reel.entities.reel_positioner import ReelPositioner, DEFAULT_VISIBLE_SYMBOLS
from src.infrastructure.clock.strategies.manual_clock import ManualClock


@dataclass
class FrameSample:
    """What a renderer would have painted on one poll."""
    frame: int
    time_ms: int
    moving: bool
    index: int
    offset: int
    symbols: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ReelRunner:
    """
    Drives a positioner the way a renderer does: poll ``advance()`` on a
    cadence, then read the offset and the visible symbols.

    In simulated mode the positioner's ManualClock is moved forward by the
    poll interval between frames, so a trace of any length is produced
    instantly and deterministically. In realtime mode the runner sleeps.
    """
    def __init__(self, positioner: ReelPositioner, visible_symbols: int = DEFAULT_VISIBLE_SYMBOLS,
                 realtime: bool = False):
        """
        Initialize the runner.

        Args:
            positioner: Positioner to poll
            visible_symbols: Number of slots read per frame
            realtime: Sleep between polls instead of moving a manual clock

        Raises:
            ValueError: If simulated mode is requested without a ManualClock,
                or realtime mode with one
        """
        self.logger = logging.getLogger("application.simulation.runner")
        self.positioner = positioner
        self.visible_symbols = visible_symbols
        self.realtime = realtime

        manual = isinstance(positioner.clock, ManualClock)
        if not realtime and not manual:
            raise ValueError("Simulated runs need a positioner driven by a ManualClock")
        if realtime and manual:
            raise ValueError("Realtime runs need a system clock; a ManualClock never moves on its own")

    def run(self, duration_ms: int, poll_interval_ms: int) -> List[FrameSample]:
        """
        Poll the positioner for ``duration_ms`` at a fixed cadence.

        Args:
            duration_ms: Length of the trace in milliseconds
            poll_interval_ms: Time between two polls

        Returns:
            One FrameSample per poll, the first taken at time 0
        """
        if poll_interval_ms <= 0:
            raise ValueError(f"Poll interval must be positive: {poll_interval_ms}")

        clock = self.positioner.clock
        start = clock.now_millis()
        frames = []

        self.logger.info(f"Running reel trace for {duration_ms} ms, polling every {poll_interval_ms} ms")

        frame = 0
        while True:
            now = clock.now_millis()
            if now - start > duration_ms:
                break

            moving = self.positioner.advance()
            frames.append(FrameSample(
                frame=frame,
                time_ms=now - start,
                moving=moving,
                index=self.positioner.current_index,
                offset=self.positioner.first_symbol_offset(),
                symbols="".join(self.positioner.visible_symbols(self.visible_symbols))
            ))
            frame += 1

            if self.realtime:
                time.sleep(poll_interval_ms / 1000.0)
            else:
                clock.advance(poll_interval_ms)

        self.logger.info(f"Recorded {len(frames)} frames")
        return frames
