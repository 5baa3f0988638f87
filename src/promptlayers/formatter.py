"""
promptlayers - ContextFormatter facade.

The single entry point for callers:
- from_template(): markup projection (one string)
- from_template_as_messages(): message projection (ordered list)
- build(): both projections from one build() call, plus warnings

Both projections come from the same list of layer formatters, so they
always agree on content. FormatterOptions post-process the output
(whitespace compression, truncation) without touching the layers.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from promptlayers.core.errors import TemplateNotFoundError
from promptlayers.core.layers import LayerFormatter
from promptlayers.core.messages import Message, Role
from promptlayers.core.registry import TemplateManager, get_template_manager
from promptlayers.core.templates import ContextTemplate, TemplateInfo

logger = logging.getLogger(__name__)

# Build warning thresholds
MAX_TOTAL_CHARS = 50_000
MAX_SYSTEM_MESSAGES = 3
MAX_CONVERSATION_MESSAGES = 20

TRUNCATION_MARKER = "..."

_WHITESPACE = re.compile(r"\s+")
_BETWEEN_TAGS = re.compile(r">\s+<")


class FormatterOptions(BaseModel):
    """Output post-processing for the facade."""

    optimize_tokens: bool = False  # Collapse whitespace runs, drop space between tags
    max_length: int | None = Field(default=None, ge=1)  # Per-message content cap


@dataclass
class ContextBuildResult:
    """Both projections of one template build."""

    template_id: str
    markup: str
    messages: list[Message] = field(default_factory=list)
    layers: list[str] = field(default_factory=list)  # Layer tags, in build order
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "template_id": self.template_id,
            "markup": self.markup,
            "messages": [m.to_dict() for m in self.messages],
            "layers": list(self.layers),
            "warnings": list(self.warnings),
        }


class ContextFormatter:
    """
    Resolves a template by id and projects its layers.

    Usage:
        formatter = ContextFormatter()
        messages = formatter.from_template_as_messages(
            "standard",
            {"role": "You are a helpful assistant", "current": "Help me"},
        )
    """

    def __init__(
        self,
        manager: TemplateManager | None = None,
        separator: str | None = None,
    ):
        """
        Args:
            manager: Registry to resolve ids from (default: process-wide manager)
            separator: Joins layer fragments in markup (default: settings.layer_separator)
        """
        self._manager = manager
        if separator is None:
            from promptlayers.config import get_settings

            separator = get_settings().layer_separator
        self.separator = separator

    @property
    def manager(self) -> TemplateManager:
        if self._manager is None:
            self._manager = get_template_manager()
        return self._manager

    # =========================================================================
    # Projections
    # =========================================================================

    def from_template(
        self,
        template_id: str,
        data: Any = None,
        options: FormatterOptions | None = None,
    ) -> str:
        """Render a template's layers as one markup document."""
        layers = self._build_layers(template_id, data)
        return self._join_markup(layers, options)

    def from_template_as_messages(
        self,
        template_id: str,
        data: Any = None,
        options: FormatterOptions | None = None,
    ) -> list[Message]:
        """Flatten a template's layers into one ordered message list."""
        layers = self._build_layers(template_id, data)
        return self._flatten_messages(layers, options)

    def build(
        self,
        template_id: str,
        data: Any = None,
        options: FormatterOptions | None = None,
    ) -> ContextBuildResult:
        layers = self._build_layers(template_id, data)
        messages = self._flatten_messages(layers, options)
        warnings = build_warnings(messages)
        for warning in warnings:
            logger.warning(f"'{template_id}': {warning}")
        return ContextBuildResult(
            template_id=template_id,
            markup=self._join_markup(layers, options),
            messages=messages,
            layers=[layer.tag for layer in layers],
            warnings=warnings,
        )

    def batch_build(
        self,
        template_id: str,
        inputs: Iterable[Any],
        options: FormatterOptions | None = None,
    ) -> list[list[Message]]:
        """Message projection for many inputs against one template."""
        template = self._resolve(template_id)
        return [self._flatten_messages(template.build(item), options) for item in inputs]

    # =========================================================================
    # Internals
    # =========================================================================

    def _resolve(self, template_id: str) -> ContextTemplate:
        template = self.manager.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id, self.manager.ids())
        return template

    def _build_layers(self, template_id: str, data: Any) -> list[LayerFormatter]:
        layers = self._resolve(template_id).build(data)
        logger.debug(f"Built '{template_id}': {[layer.tag for layer in layers]}")
        return layers

    def _join_markup(self, layers: list[LayerFormatter], options: FormatterOptions | None) -> str:
        markup = self.separator.join(layer.to_xml() for layer in layers)
        if options and options.optimize_tokens:
            markup = compress_markup(markup)
        return markup

    @staticmethod
    def _flatten_messages(
        layers: list[LayerFormatter],
        options: FormatterOptions | None,
    ) -> list[Message]:
        messages: list[Message] = []
        for layer in layers:
            messages.extend(layer.to_messages())
        if options:
            messages = [optimize_message(m, options) for m in messages]
        return messages


# =============================================================================
# Post-processing
# =============================================================================


def compress_markup(text: str) -> str:
    """Collapse whitespace runs and remove whitespace between tags."""
    return _BETWEEN_TAGS.sub("><", _WHITESPACE.sub(" ", text)).strip()


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    if max_length <= len(TRUNCATION_MARKER):
        return text[:max_length]
    return text[: max_length - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER


def optimize_message(message: Message, options: FormatterOptions) -> Message:
    content = message.content
    if options.optimize_tokens:
        content = compress_markup(content)
    if options.max_length is not None:
        content = truncate(content, options.max_length)
    if content == message.content:
        return message
    return Message(role=message.role, content=content)


def build_warnings(messages: list[Message]) -> list[str]:
    """Flag message lists likely to degrade model responses."""
    warnings: list[str] = []

    total_chars = sum(len(m.content) for m in messages)
    if total_chars > MAX_TOTAL_CHARS:
        warnings.append(f"Total message length is {total_chars} characters")

    system_count = sum(1 for m in messages if m.role == Role.SYSTEM)
    if system_count > MAX_SYSTEM_MESSAGES:
        warnings.append(f"{system_count} system messages; consider merging them")

    conversation_count = sum(1 for m in messages if m.role in (Role.USER, Role.ASSISTANT))
    if conversation_count > MAX_CONVERSATION_MESSAGES:
        warnings.append(f"{conversation_count} conversation messages; consider compressing history")

    return warnings


# =============================================================================
# Convenience Functions
# =============================================================================


def _default_formatter() -> ContextFormatter:
    return ContextFormatter(get_template_manager())


def format_context(data: Any, options: FormatterOptions | None = None) -> str:
    """Markup for data using the standard template."""
    return _default_formatter().from_template("standard", data, options)


def build_messages(
    template_id: str,
    data: Any,
    options: FormatterOptions | None = None,
) -> list[Message]:
    return _default_formatter().from_template_as_messages(template_id, data, options)


def get_available_templates() -> list[TemplateInfo]:
    return get_template_manager().list()


def recommend_templates(scenario: str) -> list[TemplateInfo]:
    """Registered templates tagged with scenario."""
    return [t.info() for t in get_template_manager().find_by_scenario(scenario)]
