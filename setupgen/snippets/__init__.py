"""Framework-aware code snippet library and resolver."""

from .library import FrameworkSnippets, SnippetLibrary
from .resolver import resolve_snippets

__all__ = ["FrameworkSnippets", "SnippetLibrary", "resolve_snippets"]
