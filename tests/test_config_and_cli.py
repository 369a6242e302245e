"""Tests for settings and the console menu."""
import pytest
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from event_scheduler.config import Settings
from event_scheduler.main import handle_choice, run_menu
from event_scheduler.scheduler import EventScheduler, MalformedPolicy

ENV_VARS = [
    "EVENT_SCHEDULER_CONFIG",
    "EVENT_SCHEDULER_DATA_FILE",
    "EVENT_SCHEDULER_ENCODING",
    "EVENT_SCHEDULER_ON_MALFORMED",
    "EVENT_SCHEDULER_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def scripted(*answers):
    """Input function that replays answers in order, then hits end of input."""
    it = iter(answers)

    def input_fn(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    return input_fn


class TestSettings:
    """Tests for loading settings."""

    def test_defaults(self, clean_env):
        s = Settings.from_env()

        assert s.data_file.name == "events.txt"
        assert s.encoding == "utf-8"
        assert s.on_malformed == MalformedPolicy.ABORT
        assert s.log_level == "WARNING"

    def test_from_env(self, clean_env, tmp_path):
        clean_env.setenv("EVENT_SCHEDULER_DATA_FILE", str(tmp_path / "e.txt"))
        clean_env.setenv("EVENT_SCHEDULER_ON_MALFORMED", "SKIP")
        clean_env.setenv("EVENT_SCHEDULER_LOG_LEVEL", "debug")

        s = Settings.from_env()

        assert s.data_file == tmp_path / "e.txt"
        assert s.on_malformed == MalformedPolicy.SKIP
        assert s.log_level == "DEBUG"

    def test_yaml_file_below_env(self, clean_env, tmp_path):
        config = tmp_path / "scheduler.yaml"
        config.write_text(
            f"data_file: {tmp_path / 'from_yaml.txt'}\n"
            "on_malformed: skip\n"
            "log_level: info\n"
        )
        clean_env.setenv("EVENT_SCHEDULER_CONFIG", str(config))
        clean_env.setenv("EVENT_SCHEDULER_LOG_LEVEL", "ERROR")

        s = Settings.from_env()

        assert s.data_file == tmp_path / "from_yaml.txt"
        assert s.on_malformed == MalformedPolicy.SKIP
        assert s.log_level == "ERROR"

    def test_invalid_policy(self, clean_env):
        clean_env.setenv("EVENT_SCHEDULER_ON_MALFORMED", "ignore")

        with pytest.raises(ValueError):
            Settings.from_env()


class TestMenu:
    """Tests for the console menu."""

    def test_add_and_display(self):
        scheduler = EventScheduler()
        output = []

        handle_choice(1, scheduler, scripted("standup", "1", "900", "daily sync"), output.append)
        handle_choice(2, scheduler, scripted(), output.append)

        assert output == [
            "Scheduled Events (Priority Order):",
            "- standup at 09:00 AM [Priority: 1]\n  Description: daily sync",
        ]

    def test_add_reprompts_on_bad_number(self):
        scheduler = EventScheduler()
        output = []

        handle_choice(1, scheduler, scripted("a", "high", "2", "1430", ""), output.append)

        assert output == ["Please enter a whole number."]
        assert scheduler.get("a").priority == 2

    def test_display_empty(self):
        output = []
        handle_choice(2, EventScheduler(), scripted(), output.append)

        assert output == ["No events scheduled."]

    def test_save_and_load_with_default_file(self, tmp_path):
        path = tmp_path / "events.txt"
        scheduler = EventScheduler(data_file=path)
        scheduler.add_event("a", 1, 100, "")

        handle_choice(5, scheduler, scripted(""), print)
        scheduler.remove_event("a")
        handle_choice(6, scheduler, scripted(""), print)

        assert scheduler.names() == ["a"]

    def test_process_and_remove(self):
        scheduler = EventScheduler()
        scheduler.add_event("a", 1, 100, "")
        scheduler.add_event("b", 2, 100, "")

        handle_choice(3, scheduler, scripted(), print)
        handle_choice(4, scheduler, scripted("b"), print)

        assert len(scheduler) == 0

    def test_invalid_choice_and_exit(self):
        output = []

        assert handle_choice(9, EventScheduler(), scripted(), output.append) is True
        assert handle_choice(7, EventScheduler(), scripted(), output.append) is False
        assert output == ["Invalid choice. Please try again.", "Exiting Event Scheduler."]

    def test_run_menu_stops_at_end_of_input(self):
        scheduler = EventScheduler()
        output = []

        run_menu(scheduler, scripted("1", "a", "1", "100", "x"), output.append)

        assert scheduler.names() == ["a"]
        assert output[-1] == "Exiting Event Scheduler."
