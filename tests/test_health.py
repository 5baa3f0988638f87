"""
Health check - verify the package and its public API import cleanly.
"""


def test_import_promptlayers():
    """Test that promptlayers package can be imported."""
    import promptlayers
    assert promptlayers.__version__ == "1.0.0"


def test_public_api_exports():
    import promptlayers

    for name in promptlayers.__all__:
        assert hasattr(promptlayers, name), f"Missing export: {name}"


def test_import_settings():
    from promptlayers.config import ContextSettings
    assert ContextSettings is not None


def test_default_manager_has_standard_template():
    from promptlayers import get_template_manager

    assert get_template_manager().has("standard")
