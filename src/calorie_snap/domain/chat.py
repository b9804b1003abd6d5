"""Chat domain models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

ChatRole = Literal["user", "model"]


@dataclass(frozen=True)
class ChatMessage:
    """One turn of the coach conversation."""

    id: str
    role: ChatRole
    text: str
    timestamp: datetime
