# src/domain/events/event_dispatcher.py
import logging
from enum import Enum
from typing import Callable, Dict, List

from .event_types import DomainEvent


Handler = Callable[[DomainEvent], None]


class EventDispatcher:
    """
    Dispatches domain events to registered handlers.
    """
    def __init__(self):
        """Initialize the event dispatcher."""
        self.logger = logging.getLogger("domain.events.dispatcher")
        self.handlers: Dict[Enum, List[Handler]] = {}  # event_type -> list of handlers
        self.catch_all_handlers: List[Handler] = []

    def register(self, event_type: Enum, handler: Handler):
        """
        Register a handler for a specific event type.

        Args:
            event_type: Type of event to handle
            handler: Function to call when event occurs
        """
        self.handlers.setdefault(event_type, []).append(handler)
        self.logger.debug(f"Registered handler for event type: {event_type.name}")

    def register_all(self, handler: Handler):
        """Register a handler that receives every event."""
        self.catch_all_handlers.append(handler)
        self.logger.debug("Registered catch-all event handler")

    def dispatch(self, event: DomainEvent):
        """
        Dispatch an event to all registered handlers.

        A failing handler is logged and does not stop the remaining handlers.

        Args:
            event: Event to dispatch
        """
        all_handlers = self.handlers.get(event.type, []) + self.catch_all_handlers

        if not all_handlers:
            return

        self.logger.debug(f"Dispatching event {event} to {len(all_handlers)} handlers")

        for handler in all_handlers:
            try:
                handler(event)
            except Exception as e:
                self.logger.error(f"Error in event handler for {event.type.name}: {str(e)}")

    def unregister(self, event_type: Enum, handler: Handler) -> bool:
        """
        Unregister a handler for a specific event type.

        Args:
            event_type: Type of event
            handler: Handler function to remove

        Returns:
            True if handler was removed, False if not found
        """
        if handler in self.handlers.get(event_type, []):
            self.handlers[event_type].remove(handler)
            self.logger.debug(f"Unregistered handler for event type: {event_type.name}")
            return True
        return False
