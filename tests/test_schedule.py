"""Tests for ordering, time formatting and the record codec."""
import pytest
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from event_scheduler.scheduler import (
    Event,
    MalformedRecordError,
    SerializationError,
    decode_record,
    dump_events,
    encode_record,
    format_event,
    format_time,
    parse_lines,
    sort_key,
)


class TestFormatTime:
    """Tests for 12-hour clock formatting."""

    @pytest.mark.parametrize("time, expected", [
        (1430, "02:30 PM"),
        (0, "12:00 AM"),
        (1200, "12:00 PM"),
        (59, "12:59 AM"),
        (905, "09:05 AM"),
        (1159, "11:59 AM"),
        (2359, "11:59 PM"),
    ])
    def test_clock_times(self, time, expected):
        assert format_time(time) == expected

    @pytest.mark.parametrize("time, expected", [
        (2400, "2400"),
        (2500, "2500"),
        (1260, "1260"),
        (-5, "-005"),
    ])
    def test_out_of_range_shows_raw_value(self, time, expected):
        assert format_time(time) == expected

    def test_format_event(self):
        event = Event("review", 1, 830, "code review")

        assert format_event(event) == (
            "- review at 08:30 AM [Priority: 1]\n"
            "  Description: code review"
        )

    def test_sort_key(self):
        events = [Event("b", 2, 100), Event("c", 1, 900), Event("a", 1, 830)]

        assert [e.name for e in sorted(events, key=sort_key)] == ["a", "c", "b"]


class TestCodec:
    """Tests for the pipe-delimited record format."""

    def test_encode_record(self):
        assert encode_record(Event("lunch", 5, 1200, "")) == "lunch|5|1200|\n"

    def test_encode_rejects_separator_in_name(self):
        with pytest.raises(SerializationError):
            encode_record(Event("a|b", 1, 100, ""))

    def test_dump_keeps_given_order(self):
        events = [Event("b", 2, 100, "x"), Event("a", 1, 100, "y")]

        assert dump_events(events) == "b|2|100|x\na|1|100|y\n"

    def test_decode_record(self):
        assert decode_record("review|1|830|code review") == Event(
            "review", 1, 830, "code review"
        )

    def test_decode_negative_and_padded_numbers(self):
        event = decode_record("early|-3|0930|")

        assert event.priority == -3
        assert event.time == 930
        assert event.description == ""

    @pytest.mark.parametrize("line", [
        "no separators",
        "a|1|100",
        "a|one|100|x",
        "a|1|1e3|x",
        "a|+1|100|x",
        "a| 1|100|x",
        "|1|100|x",
    ])
    def test_decode_malformed(self, line):
        with pytest.raises(MalformedRecordError):
            decode_record(line, line_no=7)

    def test_malformed_error_carries_line(self):
        with pytest.raises(MalformedRecordError) as exc_info:
            decode_record("a|1|100", line_no=4)

        assert exc_info.value.line_no == 4
        assert exc_info.value.line == "a|1|100"

    def test_parse_lines_reports_errors_inline(self):
        results = parse_lines("a|1|100|x\n\nbad\nb|2|200|y\n")

        assert [line_no for line_no, _ in results] == [1, 3, 4]
        assert isinstance(results[1][1], MalformedRecordError)
        assert results[2][1] == Event("b", 2, 200, "y")


class TestModels:
    """Tests for model dict conversion."""

    def test_event_dict_roundtrip(self):
        event = Event("standup", 1, 900, "daily sync")
        data = event.to_dict()

        assert data == {
            "name": "standup",
            "priority": 1,
            "time": 900,
            "description": "daily sync",
        }
        assert Event.from_dict(data) == event

    def test_event_is_immutable(self):
        event = Event("standup", 1, 900)

        with pytest.raises(AttributeError):
            event.priority = 2

    def test_result_dicts(self):
        from event_scheduler.scheduler import EventScheduler

        scheduler = EventScheduler()
        added = scheduler.add_event("a", 1, 100, "")
        removed = scheduler.remove_event("missing")

        assert added.to_dict()["status"] == "ok"
        assert removed.to_dict() == {
            "name": "missing",
            "removed": False,
            "reason": "Event 'missing' not found.",
        }
