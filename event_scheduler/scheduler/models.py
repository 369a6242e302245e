"""Data models for scheduled events."""
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Event:
    """A named, prioritized, timestamped event.

    Events are immutable. Changing one means removing it from the
    scheduler and adding a new one under the same name.
    """
    name: str
    priority: int   # Lower value is scheduled sooner
    time: int       # 24-hour clock as HHMM, e.g. 1430 for 2:30 PM
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "priority": self.priority,
            "time": self.time,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Event":
        return cls(
            name=data["name"],
            priority=int(data.get("priority", 0)),
            time=int(data.get("time", 0)),
            description=data.get("description", ""),
        )
