"""Map free-text descriptions onto the canonical snippet library keys."""

from __future__ import annotations

from typing import Literal, Optional

FrameworkKey = Literal["nextjs", "react"]
AuthKey = Literal["supabase", "clerk", "nextauth", "custom"]
LocationKey = Literal["src/app", "src/pages", "app", "pages"]

DEFAULT_FRAMEWORK_KEY: FrameworkKey = "nextjs"
DEFAULT_AUTH_KEY: AuthKey = "custom"
DEFAULT_LOCATION_KEY: LocationKey = "app"


def framework_key(description: str | None) -> FrameworkKey:
    """Return the framework key for a framework or project-structure description."""
    lower = (description or "").lower()
    if "nextjs" in lower or "next.js" in lower:
        return "nextjs"
    if "react" in lower:
        return "react"
    return DEFAULT_FRAMEWORK_KEY


def auth_key(description: str | None) -> AuthKey:
    """Return the auth provider key mentioned in ``description``."""
    lower = (description or "").lower()
    if "supabase" in lower:
        return "supabase"
    if "clerk" in lower:
        return "clerk"
    if "nextauth" in lower or "next-auth" in lower:
        return "nextauth"
    return DEFAULT_AUTH_KEY


def location_key(
    stack_details: str | None, default: Optional[LocationKey] = DEFAULT_LOCATION_KEY
) -> Optional[LocationKey]:
    """Return the file-layout key described by ``stack_details``.

    ``default`` is returned when no layout marker is present; pass ``None`` to
    tell an explicit layout apart from the fallback.
    """
    lower = (stack_details or "").lower()
    if "src/app" in lower or "src\\app" in lower:
        return "src/app"
    if "src/pages" in lower or "src\\pages" in lower:
        return "src/pages"
    if "app router" in lower or "app/" in lower:
        return "app"
    if "pages router" in lower or "pages/" in lower:
        return "pages"
    return default


__all__ = [
    "AuthKey",
    "DEFAULT_AUTH_KEY",
    "DEFAULT_FRAMEWORK_KEY",
    "DEFAULT_LOCATION_KEY",
    "FrameworkKey",
    "LocationKey",
    "auth_key",
    "framework_key",
    "location_key",
]
