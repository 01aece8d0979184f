# tests/test_event_dispatcher.py
import unittest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.domain.events.event_dispatcher import EventDispatcher
from src.domain.events.reel_events import ReelEvent, ReelEventType


class TestEventDispatcher(unittest.TestCase):
    """Test cases for handler registration and dispatch."""

    def setUp(self):
        self.dispatcher = EventDispatcher()
        self.received = []

    def _event(self, event_type=ReelEventType.REEL_ADVANCED):
        return ReelEvent(type=event_type, timestamp=100, data={"index": 2}, reel_id="reel1")

    def test_dispatch_reaches_typed_and_global_handlers(self):
        everything = []
        self.dispatcher.register(ReelEventType.REEL_ADVANCED, self.received.append)
        self.dispatcher.register_all(everything.append)

        self.dispatcher.dispatch(self._event())
        self.dispatcher.dispatch(self._event(ReelEventType.REEL_STARTED))

        self.assertEqual(len(self.received), 1)
        self.assertEqual(len(everything), 2)

    def test_unregistered_handler_is_not_called(self):
        self.dispatcher.register(ReelEventType.REEL_ADVANCED, self.received.append)

        self.assertTrue(self.dispatcher.unregister(ReelEventType.REEL_ADVANCED, self.received.append))
        self.dispatcher.dispatch(self._event())

        self.assertEqual(self.received, [])

    def test_unregister_unknown_handler(self):
        self.assertFalse(self.dispatcher.unregister(ReelEventType.REEL_ADVANCED, self.received.append))

        self.dispatcher.register(ReelEventType.REEL_ADVANCED, self.received.append)
        self.dispatcher.unregister(ReelEventType.REEL_ADVANCED, self.received.append)
        self.assertFalse(self.dispatcher.unregister(ReelEventType.REEL_ADVANCED, self.received.append))


if __name__ == "__main__":
    unittest.main()
