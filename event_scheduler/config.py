"""Configuration for the event scheduler.

Values come from environment variables (a local .env file is loaded first).
EVENT_SCHEDULER_CONFIG may point at a YAML file whose keys act as defaults
beneath the environment.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
load_dotenv(override=True)

from .scheduler.types import MalformedPolicy


def _default_data_file() -> Path:
    return Path.home() / ".event_scheduler" / "events.txt"


@dataclass
class Settings:
    """Scheduler settings"""

    # Default file used by save/load when no path is given
    data_file: Path = field(default_factory=_default_data_file)
    encoding: str = "utf-8"

    # What a load does with a line that fails to parse
    on_malformed: MalformedPolicy = MalformedPolicy.ABORT

    log_level: str = "WARNING"

    @classmethod
    def from_yaml(cls, path: str | Path) -> dict[str, Any]:
        """Read raw settings from a YAML file.

        Returns:
            Mapping of setting name to value; empty if the file is empty
        """
        with open(Path(path).expanduser(), "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables"""
        config_path = os.getenv("EVENT_SCHEDULER_CONFIG")
        file_values = cls.from_yaml(config_path) if config_path else {}

        def pick(env_name: str, key: str, default: Any) -> Any:
            value = os.getenv(env_name)
            if value is None or value == "":
                return file_values.get(key, default)
            return value

        return cls(
            data_file=Path(str(pick(
                "EVENT_SCHEDULER_DATA_FILE", "data_file", _default_data_file()
            ))).expanduser(),
            encoding=str(pick("EVENT_SCHEDULER_ENCODING", "encoding", "utf-8")),
            on_malformed=MalformedPolicy(
                str(pick("EVENT_SCHEDULER_ON_MALFORMED", "on_malformed", "abort")).lower()
            ),
            log_level=str(pick("EVENT_SCHEDULER_LOG_LEVEL", "log_level", "WARNING")).upper(),
        )


# Global settings instance
settings = Settings.from_env()
