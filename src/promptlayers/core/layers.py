"""
promptlayers - Layer Formatters.

Four-Layer Context Model:
- Role: who the model is (persona / system instruction)
- Tools: what the model can call
- Conversation: what was said so far
- Current: what the user is asking now

Each formatter is built from one layer's raw input and projects it two ways:
- to_xml(): a tagged markup fragment
- to_messages(): zero or more role-tagged messages

Both projections read the same normalized content. Formatters never raise;
blank or malformed input degrades to an empty layer.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from promptlayers.core.messages import Message, Role

TOOLS_PREFIX = "available tools:"


# =============================================================================
# Normalization
# =============================================================================


def clean_text(value: Any) -> str:
    """Trim a single layer value. None becomes an empty string."""
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value)
    return value.strip()


def clean_entries(value: Any) -> tuple[str, ...]:
    """
    Normalize a sequence layer.

    A bare string counts as a single entry. Blank entries are dropped
    and the survivors are trimmed, preserving order.
    """
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        items: Iterable[Any] = [value]
    else:
        items = value
    cleaned = (clean_text(item) for item in items)
    return tuple(item for item in cleaned if item)


# =============================================================================
# Formatter Protocol
# =============================================================================


class LayerFormatter(ABC):
    """Base class for one layer of a composed context."""

    tag: str = ""

    @property
    @abstractmethod
    def body(self) -> str:
        """Joined, normalized layer content (empty when the layer is blank)."""
        pass

    @abstractmethod
    def to_xml(self) -> str:
        """Render the layer as a tagged markup fragment."""
        pass

    @abstractmethod
    def to_messages(self) -> list[Message]:
        """Role-tagged messages this layer contributes."""
        pass

    @property
    def is_empty(self) -> bool:
        return not self.body


# =============================================================================
# Layer Implementations
# =============================================================================


@dataclass(frozen=True)
class RoleFormatter(LayerFormatter):
    """Persona / system instruction layer."""

    raw: Any = None
    content: str = field(init=False)

    tag = "role"

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", clean_text(self.raw))

    @property
    def body(self) -> str:
        return self.content

    def to_xml(self) -> str:
        return f"<{self.tag}>{self.content}</{self.tag}>"

    def to_messages(self) -> list[Message]:
        if not self.content:
            return []
        return [Message(role=Role.SYSTEM, content=self.content)]


@dataclass(frozen=True)
class ToolsFormatter(LayerFormatter):
    """Available tools, one description per entry."""

    raw: Any = None
    tools: tuple[str, ...] = field(init=False)

    tag = "tools"

    def __post_init__(self) -> None:
        object.__setattr__(self, "tools", clean_entries(self.raw))

    @property
    def body(self) -> str:
        return "\n".join(self.tools)

    def to_xml(self) -> str:
        return f"<{self.tag}>\n{self.body}\n</{self.tag}>"

    def to_messages(self) -> list[Message]:
        if not self.tools:
            return []
        return [Message(role=Role.SYSTEM, content=f"{TOOLS_PREFIX}\n{self.body}")]


@dataclass(frozen=True)
class ConversationFormatter(LayerFormatter):
    """
    Prior conversation turns.

    A single string is one user turn. A sequence alternates user/assistant
    by position after blank entries are dropped, so a removed blank never
    shifts who said what among the surviving turns.
    """

    raw: Any = None
    turns: tuple[str, ...] = field(init=False)

    tag = "conversation"

    def __post_init__(self) -> None:
        object.__setattr__(self, "turns", clean_entries(self.raw))

    @property
    def body(self) -> str:
        return "\n".join(self.turns)

    def to_xml(self) -> str:
        return f"<{self.tag}>\n{self.body}\n</{self.tag}>"

    def to_messages(self) -> list[Message]:
        return [
            Message(role=Role.USER if i % 2 == 0 else Role.ASSISTANT, content=turn)
            for i, turn in enumerate(self.turns)
        ]


@dataclass(frozen=True)
class CurrentFormatter(LayerFormatter):
    """The active user query."""

    raw: Any = None
    content: str = field(init=False)

    tag = "current"

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", clean_text(self.raw))

    @property
    def body(self) -> str:
        return self.content

    def to_xml(self) -> str:
        return f"<{self.tag}>{self.content}</{self.tag}>"

    def to_messages(self) -> list[Message]:
        if not self.content:
            return []
        return [Message(role=Role.USER, content=self.content)]
