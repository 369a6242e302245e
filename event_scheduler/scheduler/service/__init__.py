"""Scheduler service package.

- scheduler.py: EventScheduler, the single owner of scheduler state
- store.py: flat-file byte store used by save/load
"""
from .scheduler import EventScheduler, EventView
from .store import EventFileStore

__all__ = ["EventScheduler", "EventView", "EventFileStore"]
