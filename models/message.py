"""
models/message.py
-----------------
Domain model for direct messages between travelers.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Message:
    sender_id: int
    receiver_id: int
    message: str
    is_read: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    sender_name: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Message":
        return cls(
            id=row.get("id"),
            sender_id=int(row["sender_id"]),
            receiver_id=int(row["receiver_id"]),
            message=row["message"],
            is_read=bool(row.get("is_read") or False),
            created_at=row.get("created_at"),
            sender_name=row.get("sender_name"),
        )

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}
