"""Priority event scheduler with flat-file persistence."""
from .scheduler import Event, EventScheduler

__version__ = "0.1.0"

__all__ = ["Event", "EventScheduler"]
