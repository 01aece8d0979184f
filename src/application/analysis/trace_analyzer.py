# src/application/analysis/trace_analyzer.py
import logging
from typing import Dict, List, Any

import numpy as np

from src.application.simulation.reel_runner import FrameSample


class TraceAnalyzer:
    """
    Summarizes a recorded reel trace: how far the reel actually moved versus
    how far it should have moved, and how the first-symbol offset behaved.
    """
    def __init__(self):
        self.logger = logging.getLogger("application.analysis.trace")

    def analyze(self, frames: List[FrameSample], speed_ms: int, reel_length: int) -> Dict[str, Any]:
        """
        Analyze a trace.

        Steps are counted from consecutive index changes, taken modulo the
        reel length because the reel moves towards lower indexes and wraps.

        Args:
            frames: Frames in recording order
            speed_ms: Configured milliseconds per symbol
            reel_length: Number of symbols on the reelset

        Returns:
            Analysis dictionary
        """
        if not frames:
            return {"frame_count": 0}

        times = np.array([f.time_ms for f in frames], dtype=np.int64)
        indexes = np.array([f.index for f in frames], dtype=np.int64)
        offsets = np.array([f.offset for f in frames], dtype=np.int64)

        if len(frames) > 1 and reel_length > 0:
            step_counts = np.mod(indexes[:-1] - indexes[1:], reel_length)
            observed_steps = int(step_counts.sum())
            poll_intervals = np.diff(times)
            mean_poll = float(poll_intervals.mean())
        else:
            observed_steps = 0
            mean_poll = 0.0

        elapsed = int(times[-1] - times[0])
        expected_steps = elapsed // speed_ms if speed_ms > 0 else 0

        analysis = {
            "frame_count": len(frames),
            "elapsed_ms": elapsed,
            "mean_poll_interval_ms": mean_poll,
            "observed_steps": observed_steps,
            "expected_steps": expected_steps,
            "undercount": max(expected_steps - observed_steps, 0),
            "effective_ms_per_symbol": elapsed / observed_steps if observed_steps else None,
            "offset": {
                "min": int(offsets.min()),
                "max": int(offsets.max()),
                "mean": float(offsets.mean())
            }
        }

        if analysis["undercount"]:
            self.logger.warning(
                f"Reel moved {observed_steps} symbols but {expected_steps} intervals elapsed; "
                f"polling every {mean_poll:.1f} ms is too slow for {speed_ms} ms per symbol"
            )

        return analysis
