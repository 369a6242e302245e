"""Core type definitions for the event scheduler.

This module defines:
- Operation statuses and result types returned by the scheduler
- Notices emitted to the notification sink
- Exceptions raised by the record codec
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ============== Status Types ==============

class OperationStatus(str, Enum):
    """Outcome of a scheduler operation."""
    OK = "ok"
    DUPLICATE_NAME = "duplicate_name"       # add_event with a live name
    INVALID_FIELD = "invalid_field"         # field cannot be stored in a record
    NOT_FOUND = "not_found"                 # remove_event with an unknown name
    IO_FAILURE = "io_failure"               # file could not be read or written
    MALFORMED_RECORD = "malformed_record"   # persisted line failed to parse


class MalformedPolicy(str, Enum):
    """What deserialize does with a line that fails to parse."""
    ABORT = "abort"   # Whole load fails, state is left untouched
    SKIP = "skip"     # Bad line is logged and skipped


# ============== Notice Types ==============

class NoticeType(str, Enum):
    """Kind of notice sent to the notification sink."""
    EVENT_ADDED = "event.added"
    EVENT_REJECTED = "event.rejected"
    EVENT_PROCESSED = "event.processed"
    EVENT_NONE = "event.none"
    EVENT_REMOVED = "event.removed"
    EVENT_NOT_FOUND = "event.not_found"
    EVENTS_SAVED = "events.saved"
    EVENTS_SAVE_FAILED = "events.save_failed"
    EVENTS_LOADED = "events.loaded"
    EVENTS_LOAD_FAILED = "events.load_failed"
    RECORD_SKIPPED = "record.skipped"


@dataclass
class SchedulerNotice:
    """Human-readable notice emitted by the scheduler."""
    type: NoticeType
    message: str
    name: str | None = None
    timestamp_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "message": self.message,
            "name": self.name,
            "timestamp_ms": self.timestamp_ms,
        }


# ============== Result Types ==============

@dataclass
class AddResult:
    """Result of adding an event."""
    name: str
    status: OperationStatus
    reason: str = ""

    @property
    def added(self) -> bool:
        return self.status == OperationStatus.OK

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "added": self.added,
            "reason": self.reason,
        }


@dataclass
class RemoveResult:
    """Result of removing an event."""
    name: str
    removed: bool
    reason: str = ""

    @property
    def status(self) -> OperationStatus:
        return OperationStatus.OK if self.removed else OperationStatus.NOT_FOUND

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "removed": self.removed,
            "reason": self.reason,
        }


@dataclass
class LoadResult:
    """Result of replacing scheduler state from serialized records."""
    loaded: int = 0
    rejected: list[str] = field(default_factory=list)   # names add_event refused
    skipped: list[int] = field(default_factory=list)    # malformed line numbers

    def to_dict(self) -> dict[str, Any]:
        return {
            "loaded": self.loaded,
            "rejected": self.rejected,
            "skipped": self.skipped,
        }


@dataclass
class PersistResult:
    """Result of saving to or loading from a file."""
    path: str
    status: OperationStatus
    count: int = 0
    error: str | None = None
    load: LoadResult | None = None

    @property
    def ok(self) -> bool:
        return self.status == OperationStatus.OK

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "status": self.status.value,
            "count": self.count,
            "error": self.error,
            "load": self.load.to_dict() if self.load else None,
        }


# ============== Exceptions ==============

class SchedulerError(Exception):
    """Base class for scheduler errors."""


class MalformedRecordError(SchedulerError):
    """A persisted line could not be parsed into an event."""

    def __init__(self, line_no: int, line: str, reason: str):
        self.line_no = line_no
        self.line = line
        self.reason = reason
        super().__init__(f"Line {line_no}: {reason}: {line!r}")


class SerializationError(SchedulerError):
    """An event field cannot be written as a record."""
