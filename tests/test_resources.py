"""Tests for loading the bundled resources."""

from __future__ import annotations

from pathlib import Path

import pytest

from setupgen.errors import ResourceError
from setupgen.prompting.constants import TOKENS
from setupgen.resources import ResourceLoader


def test_bundled_resources_load() -> None:
    loader = ResourceLoader()

    template = loader.load_template()
    prompt = loader.load_analysis_prompt()
    library = loader.load_snippets()

    assert "{FRAMEWORK}" in template
    assert "## 1. Framework & Language Detection" in prompt
    assert set(library.frameworks) == {"nextjs", "react"}
    assert {"src/app", "src/pages", "app", "pages"} <= set(library.file_paths)


def test_bundled_template_only_uses_known_tokens() -> None:
    template = ResourceLoader().load_template()

    for token in TOKENS:
        template = template.replace(token, "")
    assert "{FLOWGLAD_" not in template
    assert "{USAGE_" not in template


def test_missing_resource_raises(tmp_path: Path) -> None:
    loader = ResourceLoader(tmp_path)

    with pytest.raises(ResourceError):
        loader.load_template()
    with pytest.raises(ResourceError):
        loader.load_snippets()


def test_malformed_snippet_library_raises(tmp_path: Path) -> None:
    (tmp_path / "code-snippets.yml").write_text("base: [unclosed\n", encoding="utf-8")

    with pytest.raises(ResourceError, match="code-snippets.yml"):
        ResourceLoader(tmp_path).load_snippets()


def test_custom_names_are_resolved_against_root(tmp_path: Path) -> None:
    (tmp_path / "guide.md").write_text("Hello {FRAMEWORK}", encoding="utf-8")

    loader = ResourceLoader(tmp_path, template_name="guide.md")

    assert loader.load_template() == "Hello {FRAMEWORK}"
