"""Tests for dependency listing output formats."""

from __future__ import annotations

import json

import pytest
import yaml

from camel_inspect.output import format_dependencies

DEPS = ["camel:log", "camel:timer"]


class TestFormatDependencies:
    def test_plain(self):
        assert format_dependencies(DEPS) == "camel:log\ncamel:timer"

    def test_json(self):
        assert json.loads(format_dependencies(DEPS, "json")) == {"dependencies": DEPS}

    def test_yaml(self):
        text = format_dependencies(DEPS, "yaml")
        assert yaml.safe_load(text) == {"dependencies": DEPS}
        assert text.startswith("dependencies:\n- camel:log")

    def test_empty_json(self):
        assert json.loads(format_dependencies([], "json")) == {"dependencies": []}

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported output format"):
            format_dependencies(DEPS, "toml")
