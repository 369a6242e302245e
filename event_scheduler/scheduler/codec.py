"""Pipe-delimited record format for persisted events.

Each event is one line:

    <name>|<priority>|<time>|<description>\\n

Decoding splits on the first three separators only, so the description is
everything after the third one and may itself contain ``|``. Names may not
contain the separator, and no field may contain a line break.
"""
import re
from typing import Iterable

from .models import Event
from .types import MalformedRecordError, SerializationError

SEPARATOR = "|"

_INT_RE = re.compile(r"-?[0-9]+")
_LINE_BREAKS = ("\n", "\r")


def field_error(name: str, priority: int, time: int, description: str) -> str | None:
    """Return why the fields cannot be stored as a record, or None."""
    for value, label in ((name, "name"), (description, "description")):
        if not isinstance(value, str):
            return f"{label} must be a string"
    for value, label in ((priority, "priority"), (time, "time")):
        # bool is an int subclass but does not encode as digits
        if not isinstance(value, int) or isinstance(value, bool):
            return f"{label} must be an integer"
    if not name:
        return "name must not be empty"
    if SEPARATOR in name:
        return f"name must not contain '{SEPARATOR}'"
    for text, label in ((name, "name"), (description, "description")):
        if any(ch in text for ch in _LINE_BREAKS):
            return f"{label} must not contain a line break"
    return None


def encode_record(event: Event) -> str:
    """Encode one event as a newline-terminated record."""
    error = field_error(event.name, event.priority, event.time, event.description)
    if error:
        raise SerializationError(f"Cannot serialize event {event.name!r}: {error}")
    return SEPARATOR.join(
        [event.name, str(event.priority), str(event.time), event.description]
    ) + "\n"


def dump_events(events: Iterable[Event]) -> str:
    """Encode events in the order given."""
    return "".join(encode_record(event) for event in events)


def _parse_int(value: str, label: str, line_no: int, line: str) -> int:
    if not _INT_RE.fullmatch(value):
        raise MalformedRecordError(line_no, line, f"{label} is not an integer")
    return int(value)


def decode_record(line: str, line_no: int = 1) -> Event:
    """Decode one record line (without its newline) into an event.

    Raises:
        MalformedRecordError: fewer than four fields, or a non-integer
            priority or time
    """
    parts = line.split(SEPARATOR, 3)
    if len(parts) < 4:
        raise MalformedRecordError(
            line_no, line, f"expected 4 fields, found {len(parts)}"
        )
    name, priority, time, description = parts
    if not name:
        raise MalformedRecordError(line_no, line, "name is empty")
    return Event(
        name=name,
        priority=_parse_int(priority, "priority", line_no, line),
        time=_parse_int(time, "time", line_no, line),
        description=description,
    )


def iter_lines(text: str) -> Iterable[tuple[int, str]]:
    """Yield (line_no, line) for every non-blank record line.

    A trailing carriage return is dropped so files written on Windows load.
    """
    for line_no, line in enumerate(text.split("\n"), start=1):
        if line.endswith("\r"):
            line = line[:-1]
        if not line.strip():
            continue
        yield line_no, line


def parse_lines(text: str) -> list[tuple[int, Event | MalformedRecordError]]:
    """Decode every record in ``text``.

    Returns:
        (line_no, result) pairs, where result is the decoded event or the
        error that line produced. Nothing is raised here so the caller can
        apply its own malformed-line policy.
    """
    results: list[tuple[int, Event | MalformedRecordError]] = []
    for line_no, line in iter_lines(text):
        try:
            results.append((line_no, decode_record(line, line_no)))
        except MalformedRecordError as e:
            results.append((line_no, e))
    return results
