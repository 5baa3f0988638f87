"""
Pytest configuration and fixtures for promptlayers tests.
"""

import os

import pytest

# Set test environment before importing promptlayers modules
os.environ["PROMPTLAYERS_LOG_LEVEL"] = "WARNING"
os.environ["PROMPTLAYERS_ALLOW_TEMPLATE_OVERWRITE"] = "true"
os.environ["PROMPTLAYERS_REGISTER_DEFAULT_TEMPLATES"] = "true"

from promptlayers.config import get_settings
from promptlayers.core.registry import TemplateManager, reset_template_manager
from promptlayers.core.templates import StandardTemplate
from promptlayers.formatter import ContextFormatter


@pytest.fixture(autouse=True)
def clean_global_state():
    """Fresh settings and process-wide manager for every test."""
    get_settings.cache_clear()
    reset_template_manager()
    yield
    reset_template_manager()
    get_settings.cache_clear()


@pytest.fixture
def manager():
    """Isolated TemplateManager holding only StandardTemplate."""
    manager = TemplateManager()
    manager.register(StandardTemplate())
    return manager


@pytest.fixture
def formatter(manager):
    """ContextFormatter bound to the isolated manager."""
    return ContextFormatter(manager, separator="\n")


@pytest.fixture
def full_input():
    """All four layers populated."""
    return {
        "role": "You are a helpful assistant",
        "tools": ["tool1: description", "tool2: description"],
        "conversation": ["User: Hello", "Assistant: Hi!"],
        "current": "Help me",
    }
