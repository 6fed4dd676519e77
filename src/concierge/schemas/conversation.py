from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Sender(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class SubscriberRecord:
    """Opt-in state for one phone number."""

    address: str
    opted_in: bool = False


@dataclass(frozen=True)
class MessageRecord:
    """A persisted message from or to a subscriber."""

    address: str
    body: str
    sender: Sender
    received_at: datetime
    id: Optional[int] = None  # Row id, assigned by the store


@dataclass(frozen=True)
class PromptMessage:
    role: Role
    text: str
