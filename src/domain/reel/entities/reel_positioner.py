# src/domain/reel/entities/reel_positioner.py
import logging
import math
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from src.domain.events.event_dispatcher import EventDispatcher
from src.domain.events.reel_events import ReelEvent, ReelEventType
from src.infrastructure.clock.strategies.clock_strategy import ClockStrategy
from src.infrastructure.clock.strategies.system_clocks import MonotonicClock

from ..exceptions import InvalidConfiguration
from .reel import Reel
from .reel_state import ReelState


BLANK_SYMBOL = " "
DEFAULT_SYMBOL_SIZE = 100
DEFAULT_VISIBLE_SYMBOLS = 4


class AdvancePolicy(Enum):
    """How many symbols a single poll may move the reel."""
    SINGLE_STEP = "single_step"  # at most one symbol per advance() call
    CATCH_UP = "catch_up"        # every full interval elapsed, remainder carried


class ReelPositioner:
    """
    Tracks the scroll position of one reel over time.

    The renderer polls ``advance()`` on its own cadence and then asks for the
    pixel offset of the first symbol and the symbol in each visible slot. The
    reel moves down: after each interval of ``speed_millis`` the previous
    symbol on the reelset becomes the first one.

    Before the first successful ``initialize()`` every query returns a safe
    default silently. Once the reel has been started, hitting a missing or
    unusable state is reported as an anomaly (logged and dispatched as an
    event) but still never raised.
    """
    def __init__(self, clock: Optional[ClockStrategy] = None,
                 symbol_size: int = DEFAULT_SYMBOL_SIZE,
                 policy: AdvancePolicy = AdvancePolicy.SINGLE_STEP,
                 event_dispatcher: Optional[EventDispatcher] = None,
                 reel_id: str = ""):
        """
        Initialize an idle positioner.

        Args:
            clock: Millisecond clock, defaults to a monotonic clock
            symbol_size: Height of one symbol in pixels, owned by the renderer
            policy: Advance policy for polls slower than the reel speed
            event_dispatcher: Optional dispatcher for reel events
            reel_id: Optional identifier used in logs and events
        """
        self.logger = logging.getLogger("domain.reel.positioner")
        self.clock = clock or MonotonicClock()
        self.symbol_size = symbol_size
        self.policy = policy
        self.event_dispatcher = event_dispatcher
        self.reel_id = reel_id

        self._state: Optional[ReelState] = None
        self._ever_started = False

    def initialize(self, start_index: int, symbols: Union[str, Sequence[str]], speed_millis: int):
        """
        Start (or restart) the reel.

        Args:
            start_index: Position on the reelset shown first, wrapped onto the reel
            symbols: The reelset, as a string or a sequence of characters
            speed_millis: Milliseconds one symbol takes to scroll past

        Raises:
            InvalidConfiguration: If the reelset is empty or holds entries that
                are not single characters, or the speed or start index is negative. The positioner is left untouched.
        """
        reel = Reel(symbols if symbols is not None else (), self.reel_id)
        self._validate(start_index, reel, speed_millis)

        self._state = ReelState(
            index=start_index % reel.length,
            reel=reel,
            speed_millis=speed_millis,
            last_advance_time=self.clock.now_millis()
        )
        self._ever_started = True

        self.logger.info(
            f"Reel {self.reel_id or '<unnamed>'} started at index {self._state.index} "
            f"of {reel.length} symbols, {speed_millis} ms per symbol"
        )
        self._dispatch(ReelEventType.REEL_STARTED, self._state.to_dict())

    def advance(self) -> bool:
        """
        Move the reel according to the time elapsed since the last step.

        Returns:
            True once the reel has been started, False before that
        """
        state = self._state
        if state is None:
            self._report_anomaly("advance() called but the reelset is missing")
            return False

        now = self.clock.now_millis()
        elapsed = state.elapsed(now)
        if elapsed < state.speed_millis:
            return True

        steps, advanced_at = self._steps_for(state, elapsed, now)
        self._state = state.with_advance(steps, advanced_at)

        self.logger.debug(f"Reel advanced {steps} symbol(s) to index {self._state.index}")
        self._dispatch(ReelEventType.REEL_ADVANCED, {"index": self._state.index, "steps": steps})
        return True

    def first_symbol_offset(self) -> int:
        """
        Pixel offset of the first visible symbol.

        The offset includes a full ``-symbol_size`` bias so that the renderer
        draws one extra symbol above the window, partially scrolled in.

        Returns:
            floor(elapsed / speed * symbol_size) - symbol_size, or 0 when the
            reel is not running or its speed is not positive
        """
        state = self._state
        if state is None:
            self._report_anomaly("first_symbol_offset() called but the reelset is missing")
            return 0

        if state.speed_millis <= 0:
            self._report_anomaly(f"The speed cannot be less or equal 0. Value: {state.speed_millis}")
            return 0

        fraction = state.elapsed(self.clock.now_millis()) / state.speed_millis
        return math.floor(fraction * self.symbol_size) - self.symbol_size

    def symbol_at(self, relative_index: int) -> str:
        """
        Get the symbol shown ``relative_index`` slots after the first one.

        Args:
            relative_index: Slot offset from the first visible symbol (>= 0)

        Returns:
            Symbol character, or a blank before the reel is started
        """
        state = self._state
        if state is None:
            self._report_anomaly("symbol_at() called but the reelset is missing")
            return BLANK_SYMBOL

        return state.reel.symbol_at(state.index + relative_index)

    def visible_symbols(self, count: int = DEFAULT_VISIBLE_SYMBOLS) -> List[str]:
        """Symbols for the first ``count`` slots, as the renderer paints them."""
        state = self._state
        if state is None:
            self._report_anomaly("visible_symbols() called but the reelset is missing")
            return [BLANK_SYMBOL] * count

        return state.reel.get_symbols_at_position(state.index, count)

    # Introspection, used by tests and diagnostics

    @property
    def state(self) -> Optional[ReelState]:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is not None

    @property
    def ever_started(self) -> bool:
        return self._ever_started

    @property
    def current_index(self) -> int:
        return self._state.index if self._state else 0

    @property
    def reelset(self) -> Tuple[str, ...]:
        return self._state.reel.symbols if self._state else ()

    @property
    def speed_millis(self) -> int:
        return self._state.speed_millis if self._state else 0

    @property
    def last_advance_time(self) -> int:
        return self._state.last_advance_time if self._state else 0

    def _validate(self, start_index: int, reel: Reel, speed_millis: int):
        if reel.length == 0:
            error = InvalidConfiguration(
                "symbols", "", "The reelset is empty. Please initialize it and try again")
        elif not reel.has_single_character_symbols():
            error = InvalidConfiguration(
                "symbols", list(reel.symbols),
                "Every reelset entry must be a single character")
        elif speed_millis < 0:
            error = InvalidConfiguration(
                "speed_millis", speed_millis, "The speed cannot be less than 0")
        elif start_index < 0:
            error = InvalidConfiguration(
                "start_index", start_index, "The start index cannot be less than 0")
        else:
            return

        self.logger.error(error.message)
        raise error

    def _steps_for(self, state: ReelState, elapsed: int, now: int) -> Tuple[int, int]:
        """Number of symbols to move and the timestamp to record for them."""
        if self.policy is AdvancePolicy.CATCH_UP and state.speed_millis > 0:
            steps = elapsed // state.speed_millis
            return steps, state.last_advance_time + steps * state.speed_millis
        return 1, now

    def _report_anomaly(self, message: str):
        # Quiet while idle before the first start
        if not self._ever_started:
            return
        self.logger.error(message)
        self._dispatch(ReelEventType.ANOMALY_DETECTED, {"message": message})

    def _dispatch(self, event_type: ReelEventType, data: dict):
        if self.event_dispatcher:
            self.event_dispatcher.dispatch(ReelEvent(type=event_type, data=data, reel_id=self.reel_id))
