"""
promptlayers - Template Protocol.

A template is a named composition policy: it turns a typed input object
into an ordered list of layer formatters. Templates are long-lived and
stateless; formatters are built fresh on every build() call.

Key concepts:
- ContextTemplate: the abstract contract (id, name, description, build)
- StandardInput: the four optional layer slots
- StandardTemplate: role -> tools -> conversation -> current
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from promptlayers.core.layers import (
    ConversationFormatter,
    CurrentFormatter,
    LayerFormatter,
    RoleFormatter,
    ToolsFormatter,
)


class TemplateInfo(BaseModel):
    """Metadata snapshot of a registered template."""

    id: str
    name: str
    description: str = ""
    scenarios: list[str] = Field(default_factory=list)
    supported_modes: list[str] = Field(default_factory=list)


class ContextTemplate(ABC):
    """
    Abstract composition policy.

    Implementations choose which layers to include and in what order.
    build() must be a pure function of its input.
    """

    scenarios: tuple[str, ...] = ()
    supported_modes: tuple[str, ...] = ()

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique registry key (e.g., "standard")."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @abstractmethod
    def build(self, data: Any) -> list[LayerFormatter]:
        """Compose data into an ordered list of layer formatters."""
        pass

    def info(self) -> TemplateInfo:
        return TemplateInfo(
            id=self.id,
            name=self.name,
            description=self.description,
            scenarios=list(self.scenarios),
            supported_modes=list(self.supported_modes),
        )


# =============================================================================
# Standard Template
# =============================================================================


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping))


def _stringify_all(values: Iterable[Any]) -> list[str]:
    return ["" if item is None else str(item) for item in values]


class StandardInput(BaseModel):
    """
    Input for StandardTemplate.

    Every slot is optional. Unknown keys are ignored and non-string
    values are stringified, so building from loosely-typed request data
    never fails validation. Any non-string iterable (deque, generator,
    custom sequence) counts as a sequence of entries.
    """

    model_config = ConfigDict(extra="ignore")

    role: str | None = None
    tools: list[str] | None = None
    conversation: str | list[str] | None = None
    current: str | None = None

    @field_validator("role", "current", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("tools", mode="before")
    @classmethod
    def _coerce_tools(cls, value: Any) -> Any:
        if value is None:
            return None
        if _is_sequence(value):
            return _stringify_all(value)
        return [str(value)]

    @field_validator("conversation", mode="before")
    @classmethod
    def _coerce_conversation(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if _is_sequence(value):
            return _stringify_all(value)
        return str(value)

    @classmethod
    def coerce(cls, data: Any) -> StandardInput:
        """
        Accept a StandardInput, a mapping, or an object with layer attributes.

        Anything else (None, a bare string, a number) has no named layers
        and is treated as empty input.
        """
        if isinstance(data, cls):
            return data
        if isinstance(data, Mapping):
            return cls.model_validate(dict(data))
        if data is None or isinstance(data, (str, bytes, int, float, bool)):
            return cls()
        fields = {
            name: getattr(data, name)
            for name in cls.model_fields
            if hasattr(data, name)
        }
        return cls.model_validate(fields)


class StandardTemplate(ContextTemplate):
    """The four-layer template: role, tools, conversation, current."""

    scenarios = ("general", "qa-session", "document-analysis")
    supported_modes = ("chat", "analysis", "extraction", "summary")

    @property
    def id(self) -> str:
        return "standard"

    @property
    def name(self) -> str:
        return "Standard four-layer template"

    @property
    def description(self) -> str:
        return "Role, tools, conversation history and current message, in that order."

    def build(self, data: StandardInput | Mapping[str, Any] | None) -> list[LayerFormatter]:
        fields = StandardInput.coerce(data)
        layers: list[LayerFormatter] = []

        if fields.role is not None:
            layers.append(RoleFormatter(fields.role))
        if fields.tools is not None:
            layers.append(ToolsFormatter(fields.tools))
        if fields.conversation is not None:
            layers.append(ConversationFormatter(fields.conversation))
        if fields.current is not None:
            layers.append(CurrentFormatter(fields.current))

        return layers
