"""
promptlayers Core - layers, templates and the template registry.

Nothing here knows about the facade or the CLI; hosts may build their
own TemplateManager and templates directly from these pieces.
"""

from promptlayers.core.errors import (
    ContextError,
    TemplateConflictError,
    TemplateNotFoundError,
)
from promptlayers.core.layers import (
    TOOLS_PREFIX,
    ConversationFormatter,
    CurrentFormatter,
    LayerFormatter,
    RoleFormatter,
    ToolsFormatter,
)
from promptlayers.core.messages import Message, Role
from promptlayers.core.registry import (
    TemplateManager,
    TemplateRecommendation,
    TemplateUsage,
    TemplateValidation,
    UsageReport,
    get_template_manager,
    register_default_templates,
    reset_template_manager,
)
from promptlayers.core.templates import (
    ContextTemplate,
    StandardInput,
    StandardTemplate,
    TemplateInfo,
)

__all__ = [
    # Messages
    "Message",
    "Role",
    # Layers
    "LayerFormatter",
    "RoleFormatter",
    "ToolsFormatter",
    "ConversationFormatter",
    "CurrentFormatter",
    "TOOLS_PREFIX",
    # Templates
    "ContextTemplate",
    "StandardInput",
    "StandardTemplate",
    "TemplateInfo",
    # Registry
    "TemplateManager",
    "TemplateRecommendation",
    "TemplateValidation",
    "TemplateUsage",
    "UsageReport",
    "get_template_manager",
    "register_default_templates",
    "reset_template_manager",
    # Errors
    "ContextError",
    "TemplateNotFoundError",
    "TemplateConflictError",
]
