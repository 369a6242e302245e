"""Scheduler module.

Exports the scheduler, its event model and the supporting types.
"""
from .codec import decode_record, dump_events, encode_record, parse_lines
from .events import NoticeEmitter, emit_notice
from .models import Event
from .schedule import format_event, format_time, sort_key
from .service import EventFileStore, EventScheduler, EventView
from .types import (
    AddResult,
    LoadResult,
    MalformedPolicy,
    MalformedRecordError,
    NoticeType,
    OperationStatus,
    PersistResult,
    RemoveResult,
    SchedulerError,
    SchedulerNotice,
    SerializationError,
)

__all__ = [
    # Core
    "EventScheduler",
    "EventView",
    "EventFileStore",
    "Event",
    # Formatting
    "format_time",
    "format_event",
    "sort_key",
    # Codec
    "encode_record",
    "decode_record",
    "dump_events",
    "parse_lines",
    # Notices
    "NoticeEmitter",
    "emit_notice",
    "NoticeType",
    "SchedulerNotice",
    # Results and errors
    "AddResult",
    "RemoveResult",
    "LoadResult",
    "PersistResult",
    "OperationStatus",
    "MalformedPolicy",
    "SchedulerError",
    "MalformedRecordError",
    "SerializationError",
]
