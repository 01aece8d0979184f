# src/domain/events/reel_events.py
from enum import Enum, auto
from dataclasses import dataclass

from .event_types import DomainEvent


class ReelEventType(Enum):
    """Event types emitted by a reel positioner."""
    REEL_STARTED = auto()
    REEL_ADVANCED = auto()
    ANOMALY_DETECTED = auto()   # logged, never raised


@dataclass
class ReelEvent(DomainEvent):
    """Event representing something that happened on a reel."""
    reel_id: str = ""

    def __post_init__(self):
        super().__post_init__()
        self.data["reel_id"] = self.reel_id
