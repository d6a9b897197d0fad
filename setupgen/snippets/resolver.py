"""Resolve auth-scoped snippet templates for a concrete framework."""

from __future__ import annotations

from typing import Dict, Optional

from .library import TEMPLATE_SUFFIX, SnippetLibrary

ResolvedSnippets = Dict[str, Dict[str, str]]


def resolve_snippets(library: SnippetLibrary, framework_key: str) -> Optional[ResolvedSnippets]:
    """Return ``auth -> name -> snippet`` with framework packages filled in.

    Entries named ``<name>_template`` are emitted as ``<name>`` after package
    substitution; other entries are copied unchanged. Returns ``None`` when
    the library has no base templates or no entry for ``framework_key``.
    """
    framework = library.framework(framework_key)
    if not library.base or framework is None:
        return None

    resolved: ResolvedSnippets = {}
    for auth, entries in library.base.items():
        resolved_entries: Dict[str, str] = {}
        for name, value in entries.items():
            if name.endswith(TEMPLATE_SUFFIX):
                resolved_entries[name[: -len(TEMPLATE_SUFFIX)]] = framework.substitute(value)
            else:
                resolved_entries[name] = value
        resolved[auth] = resolved_entries
    return resolved


__all__ = ["ResolvedSnippets", "resolve_snippets"]
