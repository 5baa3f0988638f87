"""
Tests for the promptlayers CLI.
"""

import json

from typer.testing import CliRunner

from promptlayers.main import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_templates_lists_standard():
    result = runner.invoke(app, ["templates"])
    assert result.exit_code == 0
    assert "standard" in result.output


def test_templates_unknown_scenario():
    result = runner.invoke(app, ["templates", "--scenario", "unknown"])
    assert result.exit_code == 0
    assert "No templates registered" in result.output


def test_render_markup():
    result = runner.invoke(app, ["render", "--role", "Tutor", "--current", "Help me"])
    assert result.exit_code == 0
    assert "<role>Tutor</role>\n<current>Help me</current>" in result.output


def test_render_messages_json():
    result = runner.invoke(
        app,
        [
            "render",
            "--role", "Tutor",
            "--tool", "search: web",
            "--turn", "User: Hello",
            "--turn", "Assistant: Hi!",
            "--current", "Help me",
            "--messages",
        ],
    )
    assert result.exit_code == 0
    messages = json.loads(result.stdout)
    assert [m["role"] for m in messages] == ["system", "system", "user", "assistant", "user"]
    assert messages[-1]["content"] == "Help me"


def test_render_unknown_template():
    result = runner.invoke(app, ["render", "--template", "nonexistent", "--role", "Tutor"])
    assert result.exit_code == 1
    assert "nonexistent" in result.output


def test_render_max_length_truncates_messages():
    result = runner.invoke(
        app,
        ["render", "--current", "Please summarize this document", "--max-length", "10", "--messages"],
    )
    assert result.exit_code == 0
    messages = json.loads(result.stdout)
    assert messages == [{"role": "user", "content": "Please ..."}]


def test_render_optimize_collapses_whitespace():
    result = runner.invoke(app, ["render", "--role", "Tutor", "--current", "Help   me", "--optimize"])
    assert result.exit_code == 0
    assert "<role>Tutor</role><current>Help me</current>" in result.output
