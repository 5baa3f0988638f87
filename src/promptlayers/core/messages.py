"""
promptlayers - Message types.

The shared vocabulary of every layer: a role-tagged chat message.
Messages are immutable once a layer has produced them.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    """Chat roles understood by chat-completion APIs."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single role-tagged message."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        """Serialize as a chat-completion payload entry."""
        return {"role": self.role.value, "content": self.content}
