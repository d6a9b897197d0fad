"""Snippet library model loaded from the bundled YAML document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

SERVER_PKG_TOKEN = "{SERVER_PKG}"
PROVIDER_PKG_TOKEN = "{PROVIDER_PKG}"
BILLING_HOOK_PKG_TOKEN = "{BILLING_HOOK_PKG}"
TEMPLATE_SUFFIX = "_template"


@dataclass
class FrameworkSnippets:
    """Package identifiers and route handler template for one framework."""

    server_pkg: str
    provider_pkg: str
    billing_hook_pkg: str
    route_handler_template: str = ""

    def substitute(self, template: str) -> str:
        """Replace the framework package placeholders in ``template``."""
        return (
            template.replace(SERVER_PKG_TOKEN, self.server_pkg)
            .replace(PROVIDER_PKG_TOKEN, self.provider_pkg)
            .replace(BILLING_HOOK_PKG_TOKEN, self.billing_hook_pkg)
        )

    @property
    def route_handler(self) -> str:
        return self.substitute(self.route_handler_template)


@dataclass
class SnippetLibrary:
    """Two-level lookup of auth-scoped templates and framework parameters."""

    base: Dict[str, Dict[str, str]] = field(default_factory=dict)
    frameworks: Dict[str, FrameworkSnippets] = field(default_factory=dict)
    file_paths: Dict[str, Dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SnippetLibrary":
        base: Dict[str, Dict[str, str]] = {}
        for auth, entries in _as_dict(data.get("base")).items():
            base[str(auth)] = {
                str(name): str(value)
                for name, value in _as_dict(entries).items()
                if value is not None
            }

        frameworks: Dict[str, FrameworkSnippets] = {}
        for key, entry in _as_dict(data.get("frameworks")).items():
            entry = _as_dict(entry)
            frameworks[str(key)] = FrameworkSnippets(
                server_pkg=str(entry.get("server_pkg", "")),
                provider_pkg=str(entry.get("provider_pkg", "")),
                billing_hook_pkg=str(entry.get("billing_hook_pkg", "")),
                route_handler_template=str(entry.get("route_handler_template", "")),
            )

        file_paths: Dict[str, Dict[str, str]] = {}
        for key, entry in _as_dict(data.get("file_paths")).items():
            file_paths[str(key)] = {
                str(role): str(path) for role, path in _as_dict(entry).items()
            }

        return cls(base=base, frameworks=frameworks, file_paths=file_paths)

    def framework(self, key: str) -> Optional[FrameworkSnippets]:
        return self.frameworks.get(key)


def _as_dict(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


__all__ = [
    "BILLING_HOOK_PKG_TOKEN",
    "FrameworkSnippets",
    "PROVIDER_PKG_TOKEN",
    "SERVER_PKG_TOKEN",
    "SnippetLibrary",
    "TEMPLATE_SUFFIX",
]
