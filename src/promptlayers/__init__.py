"""
promptlayers - Layered context composition for chat-model prompts.

Turns named context layers (role, tools, conversation, current message)
into either tagged markup or an ordered list of role-tagged messages.

Usage:
    from promptlayers import ContextFormatter

    messages = ContextFormatter().from_template_as_messages(
        "standard",
        {"role": "You are a helpful assistant", "current": "Help me"},
    )
"""

__version__ = "1.0.0"

from promptlayers.core import (
    ContextError,
    ContextTemplate,
    ConversationFormatter,
    CurrentFormatter,
    LayerFormatter,
    Message,
    Role,
    RoleFormatter,
    StandardInput,
    StandardTemplate,
    TemplateConflictError,
    TemplateInfo,
    TemplateManager,
    TemplateNotFoundError,
    ToolsFormatter,
    get_template_manager,
    reset_template_manager,
)
from promptlayers.formatter import (
    ContextBuildResult,
    ContextFormatter,
    FormatterOptions,
    build_messages,
    format_context,
    get_available_templates,
    recommend_templates,
)

__all__ = [
    "__version__",
    # Facade
    "ContextFormatter",
    "ContextBuildResult",
    "FormatterOptions",
    "format_context",
    "build_messages",
    "get_available_templates",
    "recommend_templates",
    # Core
    "Message",
    "Role",
    "LayerFormatter",
    "RoleFormatter",
    "ToolsFormatter",
    "ConversationFormatter",
    "CurrentFormatter",
    "ContextTemplate",
    "StandardInput",
    "StandardTemplate",
    "TemplateInfo",
    "TemplateManager",
    "get_template_manager",
    "reset_template_manager",
    # Errors
    "ContextError",
    "TemplateNotFoundError",
    "TemplateConflictError",
]
