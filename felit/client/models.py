"""Client-side models for message display."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass
class ChatMessage:
    id: int
    username: str
    is_admin: bool
    text: str
    timestamp: datetime

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ChatMessage":
        return cls(
            id=data["id"],
            username=data["username"],
            is_admin=bool(data["is_admin"]),
            text=data["text"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )

    def render(self) -> str:
        marker = " [admin]" if self.is_admin else ""
        return f"[{self.timestamp:%H:%M}] {self.username}{marker}: {self.text}"
