"""The event scheduler.

A name-indexed mapping is the only storage. The priority-ordered view is
derived from a snapshot of the mapping whenever it is needed, so removal
never leaves a stale entry behind in a second structure.
"""
import codecs
import heapq
from pathlib import Path
from typing import Iterator

from loguru import logger

from ..codec import dump_events, field_error, parse_lines
from ..events import NoticeEmitter, NoticeHandler, emit_notice
from ..models import Event
from ..schedule import format_time, sort_key
from ..types import (
    AddResult,
    LoadResult,
    MalformedPolicy,
    MalformedRecordError,
    NoticeType,
    OperationStatus,
    PersistResult,
    RemoveResult,
    SerializationError,
)
from .store import EventFileStore

logger = logger.bind(module="scheduler.service")


class EventView:
    """Lazy, restartable priority-ordered view over a snapshot of events.

    Each iteration heap-pops a fresh copy of the snapshot, so iterating
    twice yields the same order and later scheduler changes are not seen.
    Events with an equal (priority, time) keep their insertion order.
    """

    def __init__(self, events: list[Event]):
        self._entries = [
            (sort_key(event), seq, event) for seq, event in enumerate(events)
        ]

    def __iter__(self) -> Iterator[Event]:
        heap = list(self._entries)
        heapq.heapify(heap)
        while heap:
            yield heapq.heappop(heap)[2]

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


class EventScheduler:
    """Priority scheduler for uniquely named events."""

    def __init__(
        self,
        data_file: str | Path | None = None,
        encoding: str = "utf-8",
        on_malformed: MalformedPolicy = MalformedPolicy.ABORT,
        emitter: NoticeEmitter | None = None,
    ):
        """Initialize an empty scheduler.

        Args:
            data_file: Default file for save_to_file/load_from_file
            encoding: Text encoding of serialized records
            on_malformed: Policy for lines that fail to parse on load
            emitter: Notice emitter; a private one is created if omitted

        Raises:
            LookupError: ``encoding`` is not a known codec
        """
        self.data_file = Path(data_file).expanduser() if data_file else None
        self.encoding = codecs.lookup(encoding).name
        self.on_malformed = MalformedPolicy(on_malformed)
        self.emitter = emitter or NoticeEmitter()
        self._events: dict[str, Event] = {}

    # ============== Lookup ==============

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, name: object) -> bool:
        return name in self._events

    def get(self, name: str) -> Event | None:
        """Get a live event by name."""
        return self._events.get(name)

    def names(self) -> list[str]:
        """Names of live events, in insertion order."""
        return list(self._events)

    def add_handler(self, handler: NoticeHandler) -> None:
        """Register a notice handler on this scheduler's emitter."""
        self.emitter.add_handler(handler)

    # ============== Core Operations ==============

    def add_event(
        self,
        name: str,
        priority: int,
        time: int,
        description: str = "",
    ) -> AddResult:
        """Add an event unless its name is already scheduled.

        Returns:
            AddResult with status OK, DUPLICATE_NAME or INVALID_FIELD. A
            rejected add leaves the scheduler unchanged.
        """
        if name in self._events:
            message = f"Event with name '{name}' already exists."
            logger.warning(message)
            emit_notice(self.emitter, NoticeType.EVENT_REJECTED, message, name)
            return AddResult(name, OperationStatus.DUPLICATE_NAME, message)

        error = field_error(name, priority, time, description)
        if error:
            message = f"Event '{name}' rejected: {error}."
            logger.warning(message)
            emit_notice(self.emitter, NoticeType.EVENT_REJECTED, message, name)
            return AddResult(name, OperationStatus.INVALID_FIELD, message)

        self._events[name] = Event(name, priority, time, description)
        message = f"Event '{name}' added successfully."
        logger.info(message)
        emit_notice(self.emitter, NoticeType.EVENT_ADDED, message, name)
        return AddResult(name, OperationStatus.OK)

    def peek_ordered(self) -> EventView:
        """Ordered view of all live events. Does not change state."""
        return EventView(list(self._events.values()))

    def process_next_event(self) -> Event | None:
        """Remove and return the highest-priority event.

        Returns:
            The consumed event, or None if nothing is scheduled
        """
        if not self._events:
            emit_notice(self.emitter, NoticeType.EVENT_NONE, "No events to process.")
            return None

        # min() keeps the first of equal keys, matching EventView's tie order
        event = min(self._events.values(), key=sort_key)
        del self._events[event.name]
        message = (
            f"Processing event: {event.name} at {format_time(event.time)}\n"
            f"  Description: {event.description}"
        )
        logger.info(f"Processed event '{event.name}'")
        emit_notice(self.emitter, NoticeType.EVENT_PROCESSED, message, event.name)
        return event

    def remove_event(self, name: str) -> RemoveResult:
        """Cancel an event by name, freeing the name for reuse."""
        if name not in self._events:
            message = f"Event '{name}' not found."
            logger.warning(message)
            emit_notice(self.emitter, NoticeType.EVENT_NOT_FOUND, message, name)
            return RemoveResult(name, removed=False, reason=message)

        del self._events[name]
        message = f"Event '{name}' removed successfully."
        logger.info(message)
        emit_notice(self.emitter, NoticeType.EVENT_REMOVED, message, name)
        return RemoveResult(name, removed=True)

    # ============== Serialization ==============

    def serialize(self) -> bytes:
        """Encode every live event, in priority order.

        Raises:
            SerializationError: an event field cannot be written as a record
        """
        return dump_events(self.peek_ordered()).encode(self.encoding)

    def deserialize(self, data: bytes | str) -> LoadResult:
        """Replace all state with the events encoded in ``data``.

        Every line is parsed before anything is replaced. Under the ABORT
        policy the first malformed line raises and the scheduler keeps its
        previous events. Under SKIP malformed lines are reported in the
        result. Records are applied through add_event, so a repeated name
        keeps its first occurrence.

        Raises:
            MalformedRecordError: a line failed to parse (ABORT policy)
            UnicodeDecodeError: ``data`` is not valid in the configured encoding
        """
        text = data.decode(self.encoding) if isinstance(data, bytes) else data
        parsed = parse_lines(text)

        result = LoadResult()
        events: list[Event] = []
        for line_no, item in parsed:
            if isinstance(item, MalformedRecordError):
                if self.on_malformed == MalformedPolicy.ABORT:
                    logger.error(f"Aborting load: {item}")
                    raise item
                logger.warning(f"Skipping malformed record: {item}")
                emit_notice(
                    self.emitter, NoticeType.RECORD_SKIPPED,
                    f"Skipped malformed line {line_no}: {item.reason}.",
                )
                result.skipped.append(line_no)
                continue
            events.append(item)

        self._events = {}
        for event in events:
            added = self.add_event(
                event.name, event.priority, event.time, event.description,
            )
            if added.added:
                result.loaded += 1
            else:
                result.rejected.append(event.name)

        logger.debug(
            f"Deserialized {result.loaded} events "
            f"({len(result.rejected)} rejected, {len(result.skipped)} skipped)"
        )
        return result

    # ============== File I/O ==============

    def _resolve_path(self, path: str | Path | None) -> Path:
        if path is not None:
            return Path(path).expanduser()
        if self.data_file is None:
            raise ValueError("No file given and no default data file configured")
        return self.data_file

    def save_to_file(self, path: str | Path | None = None) -> PersistResult:
        """Write all events to a file in priority order.

        Failures are reported in the result and as a notice; the in-memory
        events are never touched.
        """
        target = self._resolve_path(path)
        try:
            data = self.serialize()
        except (SerializationError, UnicodeEncodeError) as e:
            logger.error(f"Failed to serialize events: {e}")
            emit_notice(
                self.emitter, NoticeType.EVENTS_SAVE_FAILED,
                f"Failed to save events: {e}",
            )
            return PersistResult(str(target), OperationStatus.INVALID_FIELD, error=str(e))

        try:
            EventFileStore(target).write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to save events to {target}: {e}")
            emit_notice(
                self.emitter, NoticeType.EVENTS_SAVE_FAILED,
                "Failed to open file for saving.",
            )
            return PersistResult(str(target), OperationStatus.IO_FAILURE, error=str(e))

        message = f"Events saved to {target} successfully."
        logger.info(message)
        emit_notice(self.emitter, NoticeType.EVENTS_SAVED, message)
        return PersistResult(str(target), OperationStatus.OK, count=len(self._events))

    def load_from_file(self, path: str | Path | None = None) -> PersistResult:
        """Replace all events with those stored in a file.

        An unreadable file or an aborted parse is reported in the result and
        as a notice, and leaves the current events in place.
        """
        target = self._resolve_path(path)
        try:
            data = EventFileStore(target).read_bytes()
            load = self.deserialize(data)
        except OSError as e:
            logger.error(f"Failed to load events from {target}: {e}")
            emit_notice(
                self.emitter, NoticeType.EVENTS_LOAD_FAILED,
                "Failed to open file for loading.",
            )
            return PersistResult(str(target), OperationStatus.IO_FAILURE, error=str(e))
        except UnicodeDecodeError as e:
            logger.error(f"Could not decode {target} as {self.encoding}: {e}")
            emit_notice(
                self.emitter, NoticeType.EVENTS_LOAD_FAILED,
                f"Could not decode {target} as {self.encoding}.",
            )
            return PersistResult(
                str(target), OperationStatus.MALFORMED_RECORD, error=str(e),
            )
        except MalformedRecordError as e:
            emit_notice(
                self.emitter, NoticeType.EVENTS_LOAD_FAILED,
                f"Failed to load events from {target}: {e}",
            )
            return PersistResult(
                str(target), OperationStatus.MALFORMED_RECORD, error=str(e),
            )

        message = f"Events loaded from {target} successfully."
        logger.info(message)
        emit_notice(self.emitter, NoticeType.EVENTS_LOADED, message)
        return PersistResult(
            str(target), OperationStatus.OK, count=load.loaded, load=load,
        )
