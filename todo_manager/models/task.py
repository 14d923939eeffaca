"""
Task module - The to-do record and its JSON form
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Task:
    """A single to-do item."""
    id: int
    text: str
    completed: bool = False
    created_at: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        created_at = data.get("createdAt", data.get("created_at"))
        return cls(
            id=int(data["id"]),
            text=data["text"],
            completed=bool(data.get("completed", False)),
            created_at=created_at or utc_timestamp(),
        )
