"""Tests for literal token replacement."""

from __future__ import annotations

from setupgen.prompting import apply_template_replacements


def test_replaces_every_occurrence() -> None:
    template = "{FRAMEWORK} app using {LANGUAGE}. Built with {FRAMEWORK}."

    result = apply_template_replacements(
        template, {"{FRAMEWORK}": "Next.js", "{LANGUAGE}": "TypeScript"}
    )

    assert result == "Next.js app using TypeScript. Built with Next.js."


def test_template_without_tokens_is_unchanged() -> None:
    template = "Plain text with {braces} but no known tokens."
    replacements = {"{FRAMEWORK}": "Next.js"}

    once = apply_template_replacements(template, replacements)

    assert once == template
    assert apply_template_replacements(once, replacements) == once


def test_empty_map_returns_template() -> None:
    assert apply_template_replacements("{FRAMEWORK}", {}) == "{FRAMEWORK}"


def test_values_are_inserted_literally() -> None:
    result = apply_template_replacements(
        "{A} and {B}", {"{A}": r"\1 $0 .* {B}", "{B}": "b"}
    )

    assert result == r"\1 $0 .* {B} and b"


def test_longest_key_wins_on_overlap() -> None:
    result = apply_template_replacements(
        "{USAGE_METER_SLUGS}", {"{USAGE_METER_SLUGS}": "slugs", "{USAGE_METER": "meter"}
    )

    assert result == "slugs"


def test_values_without_tokens_make_replacement_idempotent() -> None:
    replacements = {"{FRAMEWORK}": "Next.js"}

    once = apply_template_replacements("Use {FRAMEWORK}", replacements)

    assert apply_template_replacements(once, replacements) == once


def test_token_bearing_values_are_not_idempotent() -> None:
    replacements = {"{A}": "{B}", "{B}": "b"}

    once = apply_template_replacements("{A}", replacements)

    assert once == "{B}"
    assert apply_template_replacements(once, replacements) == "b"
