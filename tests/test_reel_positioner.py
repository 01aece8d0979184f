# tests/test_reel_positioner.py
import unittest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.domain.events.event_dispatcher import EventDispatcher
from src.domain.events.reel_events import ReelEventType
from src.domain.reel.entities.reel_positioner import (
    AdvancePolicy, ReelPositioner, BLANK_SYMBOL
)
from src.domain.reel.exceptions import InvalidConfiguration, ReelError
from src.infrastructure.clock.strategies.manual_clock import ManualClock


LOGGER_NAME = "domain.reel.positioner"


class TestReelPositionerStart(unittest.TestCase):
    """Starting and restarting a reel."""

    def setUp(self):
        self.clock = ManualClock(start_millis=1000)
        self.positioner = ReelPositioner(clock=self.clock)

    def test_start_valid_input_values_set_correctly(self):
        self.positioner.initialize(1, ['A', 'B', 'C'], 100)

        self.assertTrue(self.positioner.is_active)
        self.assertEqual(self.positioner.current_index, 1)
        self.assertEqual(self.positioner.reelset, ('A', 'B', 'C'))
        self.assertEqual(self.positioner.speed_millis, 100)
        self.assertEqual(self.positioner.last_advance_time, 1000)

    def test_start_index_is_wrapped_onto_reel(self):
        self.positioner.initialize(7, "ABC", 100)

        self.assertEqual(self.positioner.current_index, 1)
        self.assertEqual(self.positioner.symbol_at(0), 'B')

    def test_empty_reelset_raises(self):
        with self.assertLogs(LOGGER_NAME, level="ERROR"):
            with self.assertRaises(InvalidConfiguration) as ctx:
                self.positioner.initialize(0, [], 100)

        self.assertEqual(ctx.exception.parameter, "symbols")
        self.assertIn("reelset is empty", str(ctx.exception))

    def test_missing_reelset_raises(self):
        with self.assertLogs(LOGGER_NAME, level="ERROR"):
            with self.assertRaises(InvalidConfiguration):
                self.positioner.initialize(0, None, 100)

    def test_negative_speed_raises(self):
        with self.assertLogs(LOGGER_NAME, level="ERROR"):
            with self.assertRaises(InvalidConfiguration) as ctx:
                self.positioner.initialize(0, ['A', 'B'], -50)

        self.assertEqual(ctx.exception.parameter, "speed_millis")
        self.assertEqual(ctx.exception.value, -50)
        self.assertIsInstance(ctx.exception, ReelError)

    def test_negative_start_index_raises(self):
        with self.assertLogs(LOGGER_NAME, level="ERROR"):
            with self.assertRaises(InvalidConfiguration) as ctx:
                self.positioner.initialize(-1, ['A', 'B'], 50)

        self.assertEqual(ctx.exception.parameter, "start_index")

    def test_validation_order(self):
        """An empty reelset is reported before a bad speed, a bad speed before a bad index."""
        with self.assertLogs(LOGGER_NAME, level="ERROR"):
            with self.assertRaises(InvalidConfiguration) as ctx:
                self.positioner.initialize(-1, [], -1)
            self.assertEqual(ctx.exception.parameter, "symbols")

            with self.assertRaises(InvalidConfiguration) as ctx:
                self.positioner.initialize(-1, ['A'], -1)
            self.assertEqual(ctx.exception.parameter, "speed_millis")

    def test_failed_start_leaves_state_unchanged(self):
        self.positioner.initialize(2, "ABCD", 100)
        state_before = self.positioner.state
        self.clock.advance(30)

        with self.assertLogs(LOGGER_NAME, level="ERROR"):
            for args in ((0, [], 100), (0, "XY", -1), (-3, "XY", 10)):
                with self.assertRaises(InvalidConfiguration):
                    self.positioner.initialize(*args)

        self.assertIs(self.positioner.state, state_before)
        self.assertEqual(self.positioner.reelset, ('A', 'B', 'C', 'D'))
        self.assertEqual(self.positioner.last_advance_time, 1000)

    def test_failed_first_start_stays_inactive(self):
        with self.assertLogs(LOGGER_NAME, level="ERROR"):
            with self.assertRaises(InvalidConfiguration):
                self.positioner.initialize(0, "AB", -1)

        self.assertFalse(self.positioner.is_active)
        self.assertFalse(self.positioner.ever_started)

    def test_restart_replaces_everything(self):
        self.positioner.initialize(0, "ABC", 100)
        self.clock.advance(150)
        self.positioner.advance()

        self.clock.advance(40)
        self.positioner.initialize(1, "WXYZ", 250)

        self.assertEqual(self.positioner.current_index, 1)
        self.assertEqual(self.positioner.reelset, ('W', 'X', 'Y', 'Z'))
        self.assertEqual(self.positioner.speed_millis, 250)
        self.assertEqual(self.positioner.last_advance_time, 1190)
        self.assertEqual(self.positioner.first_symbol_offset(), -100)

    def test_zero_speed_is_accepted(self):
        self.positioner.initialize(0, "ABC", 0)
        self.assertTrue(self.positioner.is_active)

    def test_multi_character_entries_rejected(self):
        with self.assertLogs(LOGGER_NAME, level="ERROR"):
            with self.assertRaises(InvalidConfiguration) as ctx:
                self.positioner.initialize(0, ["AB", "C"], 100)

        self.assertEqual(ctx.exception.parameter, "symbols")
        self.assertIn("single character", str(ctx.exception))
        self.assertFalse(self.positioner.is_active)

    def test_non_string_entries_rejected(self):
        with self.assertLogs(LOGGER_NAME, level="ERROR"):
            with self.assertRaises(InvalidConfiguration):
                self.positioner.initialize(0, [1, 2, 3], 100)


class TestReelPositionerIdle(unittest.TestCase):
    """Behaviour before the reel was ever started."""

    def setUp(self):
        self.positioner = ReelPositioner(clock=ManualClock())

    def test_update_not_started_yet_returns_false(self):
        self.assertFalse(self.positioner.advance())

    def test_symbol_not_started_yet_returns_space(self):
        self.assertEqual(self.positioner.symbol_at(0), ' ')
        self.assertEqual(self.positioner.symbol_at(3), BLANK_SYMBOL)
        self.assertEqual(self.positioner.visible_symbols(), [' ', ' ', ' ', ' '])

    def test_offset_not_started_yet_is_zero(self):
        self.assertEqual(self.positioner.first_symbol_offset(), 0)

    def test_idle_queries_are_silent(self):
        with self.assertNoLogs(LOGGER_NAME, level="ERROR"):
            self.positioner.advance()
            self.positioner.first_symbol_offset()
            self.positioner.symbol_at(0)

    def test_introspection_defaults(self):
        self.assertFalse(self.positioner.is_active)
        self.assertIsNone(self.positioner.state)
        self.assertEqual(self.positioner.current_index, 0)
        self.assertEqual(self.positioner.reelset, ())
        self.assertEqual(self.positioner.speed_millis, 0)
        self.assertEqual(self.positioner.last_advance_time, 0)


class TestReelPositionerMotion(unittest.TestCase):
    """Discrete steps and the sub-symbol offset."""

    def setUp(self):
        self.clock = ManualClock(start_millis=1)
        self.positioner = ReelPositioner(clock=self.clock, symbol_size=100)

    def test_update_symbols_moving_returns_true(self):
        self.positioner.initialize(0, ['A', 'B', 'C'], 100)
        self.assertTrue(self.positioner.advance())

    def test_symbols_follow_start_position(self):
        self.positioner.initialize(1, ['A', 'B', 'C'], 100)

        self.assertEqual(self.positioner.symbol_at(0), 'B')
        self.assertEqual(self.positioner.symbol_at(1), 'C')
        self.assertEqual(self.positioner.symbol_at(2), 'A')

    def test_symbol_lookup_wraps_for_any_slot(self):
        symbols = "AGHHBX"
        self.positioner.initialize(4, symbols, 100)

        for k in range(20):
            self.assertEqual(self.positioner.symbol_at(k), symbols[(4 + k) % len(symbols)])

    def test_no_step_before_interval(self):
        self.positioner.initialize(1, "ABC", 100)
        self.clock.advance(99)

        self.assertTrue(self.positioner.advance())
        self.assertEqual(self.positioner.current_index, 1)
        self.assertEqual(self.positioner.last_advance_time, 1)

    def test_one_step_when_interval_reached(self):
        self.positioner.initialize(0, "ABC", 100)
        self.clock.advance(100)

        self.assertTrue(self.positioner.advance())
        self.assertEqual(self.positioner.current_index, 2)
        self.assertEqual(self.positioner.last_advance_time, 101)

        # Previous symbol is now first: the reel moves down
        self.assertEqual(self.positioner.visible_symbols(3), ['C', 'A', 'B'])

        # Timer was reset, an immediate second poll does not move
        self.positioner.advance()
        self.assertEqual(self.positioner.current_index, 2)

    def test_reelset_walkthrough(self):
        """AGHHBX from 0 reveals X, then B, at the top."""
        self.positioner.initialize(0, "AGHHBX", 200)
        self.assertEqual(self.positioner.visible_symbols(3), ['A', 'G', 'H'])

        self.clock.advance(200)
        self.positioner.advance()
        self.assertEqual(self.positioner.visible_symbols(), ['X', 'A', 'G', 'H'])

        self.clock.advance(200)
        self.positioner.advance()
        self.assertEqual(self.positioner.visible_symbols(), ['B', 'X', 'A', 'G'])

    def test_visible_symbols_wrap_past_reel_end(self):
        self.positioner.initialize(4, "AGHHBX", 100)

        self.assertEqual(self.positioner.visible_symbols(5), ['B', 'X', 'A', 'G', 'H'])

    def test_clock_stepping_back_holds_reel(self):
        self.positioner.initialize(0, "ABC", 100)
        self.clock.set(-500)

        self.assertTrue(self.positioner.advance())
        self.assertEqual(self.positioner.current_index, 0)
        self.assertEqual(self.positioner.first_symbol_offset(), -100)

    def test_single_step_policy_moves_once_per_poll(self):
        """A slow poll still moves only one symbol."""
        self.positioner.initialize(0, "ABCDE", 100)
        self.clock.advance(1000)

        self.positioner.advance()
        self.assertEqual(self.positioner.current_index, 4)
        self.assertEqual(self.positioner.last_advance_time, 1001)

    def test_catch_up_policy_moves_every_elapsed_interval(self):
        positioner = ReelPositioner(clock=self.clock, symbol_size=100, policy=AdvancePolicy.CATCH_UP)
        positioner.initialize(0, "ABCDE", 100)
        self.clock.advance(250)

        positioner.advance()
        self.assertEqual(positioner.current_index, 3)
        # Remainder of the interval is carried over
        self.assertEqual(positioner.last_advance_time, 201)
        self.assertEqual(positioner.first_symbol_offset(), -50)

    def test_catch_up_policy_with_zero_speed_steps_once(self):
        positioner = ReelPositioner(clock=self.clock, policy=AdvancePolicy.CATCH_UP)
        positioner.initialize(0, "ABC", 0)

        positioner.advance()
        self.assertEqual(positioner.current_index, 2)

    def test_zero_speed_moves_every_poll(self):
        self.positioner.initialize(0, "ABC", 0)

        self.positioner.advance()
        self.positioner.advance()
        self.assertEqual(self.positioner.current_index, 1)

    def test_first_symbol_offset_at_start(self):
        self.positioner.initialize(0, "ABC", 100)
        self.assertEqual(self.positioner.first_symbol_offset(), -100)

    def test_first_symbol_offset_between_steps(self):
        positioner = ReelPositioner(clock=self.clock, symbol_size=80)
        positioner.initialize(0, "ABC", 200)
        self.clock.advance(50)

        self.assertEqual(positioner.first_symbol_offset(), -60)

        self.clock.advance(149)
        offset = positioner.first_symbol_offset()
        self.assertLessEqual(offset, 0)
        self.assertGreater(offset, -80)

    def test_first_symbol_offset_is_floored(self):
        positioner = ReelPositioner(clock=self.clock, symbol_size=100)
        positioner.initialize(0, "ABC", 3)
        self.clock.advance(1)

        # 1/3 of 100 pixels is 33.33...
        self.assertEqual(positioner.first_symbol_offset(), -67)

    def test_zero_speed_offset_is_zero_and_reported(self):
        self.positioner.initialize(0, ['A', 'B', 'C'], 0)

        with self.assertLogs(LOGGER_NAME, level="ERROR") as logs:
            self.assertEqual(self.positioner.first_symbol_offset(), 0)
        self.assertIn("speed cannot be less or equal 0", logs.output[0])


class TestReelPositionerAnomalies(unittest.TestCase):
    """Missing state after a start is reported but never raised."""

    def setUp(self):
        self.clock = ManualClock()
        self.dispatcher = EventDispatcher()
        self.events = []
        self.dispatcher.register_all(self.events.append)
        self.positioner = ReelPositioner(clock=self.clock, event_dispatcher=self.dispatcher,
                                         reel_id="reel1")

    def test_events_for_start_and_advance(self):
        self.positioner.initialize(0, "ABC", 100)
        self.clock.advance(100)
        self.positioner.advance()

        self.assertEqual([e.type for e in self.events],
                         [ReelEventType.REEL_STARTED, ReelEventType.REEL_ADVANCED])
        self.assertEqual(self.events[0].data["reelset"], "ABC")
        self.assertEqual(self.events[0].data["reel_id"], "reel1")
        self.assertEqual(self.events[1].data["index"], 2)
        self.assertEqual(self.events[1].data["steps"], 1)

    def test_no_anomaly_events_before_start(self):
        self.positioner.advance()
        self.positioner.symbol_at(0)
        self.assertEqual(self.events, [])

    def test_lost_state_after_start_is_reported(self):
        self.positioner.initialize(0, "ABC", 100)
        self.positioner._state = None

        with self.assertLogs(LOGGER_NAME, level="ERROR") as logs:
            self.assertFalse(self.positioner.advance())
            self.assertEqual(self.positioner.symbol_at(0), ' ')
            self.assertEqual(self.positioner.first_symbol_offset(), 0)
            self.assertEqual(self.positioner.visible_symbols(3), [' ', ' ', ' '])

        self.assertEqual(len(logs.output), 4)
        anomalies = [e for e in self.events if e.type is ReelEventType.ANOMALY_DETECTED]
        self.assertEqual(len(anomalies), 4)
        self.assertIn("reelset is missing", anomalies[0].data["message"])

    def test_failing_handler_does_not_break_positioner(self):
        def broken_handler(event):
            raise RuntimeError("boom")

        self.dispatcher.register(ReelEventType.REEL_STARTED, broken_handler)

        with self.assertLogs("domain.events.dispatcher", level="ERROR"):
            self.positioner.initialize(0, "ABC", 100)
        self.assertTrue(self.positioner.is_active)


if __name__ == "__main__":
    unittest.main()
