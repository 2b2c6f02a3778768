from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ChatMessage:
    sender_uid: str
    message: str
    timestamp: datetime = field(default_factory=utc_now)

    def as_dict(self) -> dict[str, Any]:
        return {
            "senderUID": self.sender_uid,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class Group:
    """A study group document; ``member_uids`` always contains the admin at creation."""

    id: str
    name: str
    admin_uid: str
    member_uids: list[str]
    about: str | None = None
    icon: str | None = None
    color: str | None = None
    goals: list[str] = field(default_factory=list)
    chat: list[ChatMessage] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def is_member(self, user_id: str) -> bool:
        return user_id in self.member_uids

    def summary(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "members": len(self.member_uids)}

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "about": self.about,
            "icon": self.icon,
            "color": self.color,
            "adminUID": self.admin_uid,
            "UID": list(self.member_uids),
            "goals": list(self.goals),
            "chat": [message.as_dict() for message in self.chat],
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
