"""
promptlayers - Errors.

Formatters absorb bad input instead of raising, so the only failures
come from the registry boundary.
"""

from collections.abc import Iterable


class ContextError(Exception):
    """Base class for promptlayers errors."""


class TemplateNotFoundError(ContextError, LookupError):
    """No template is registered under the requested id."""

    def __init__(self, template_id: str, available: Iterable[str] = ()):
        self.template_id = template_id
        self.available = list(available)
        known = ", ".join(self.available) or "none"
        super().__init__(f"Template '{template_id}' not found. Available templates: {known}")


class TemplateConflictError(ContextError, ValueError):
    """A different template already holds this id and overwrites are disabled."""

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Template '{template_id}' is already registered")
