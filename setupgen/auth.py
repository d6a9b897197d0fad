"""Resolve the caller's API key from its possible sources."""

from __future__ import annotations

import os
from typing import Optional, Sequence

from .errors import MissingCredentialError
from .fallback import first_present

DEFAULT_ENV_KEYS: tuple[str, ...] = ("SETUPGEN_API_KEY", "MCP_API_KEY")
_BEARER_SCHEME = "bearer"


def resolve_api_key(
    explicit: Optional[str] = None,
    upstream_token: Optional[str] = None,
    *,
    env_keys: Sequence[str] = DEFAULT_ENV_KEYS,
) -> Optional[str]:
    """Return the first available credential, or ``None``.

    Sources are consulted in order: the explicit argument, the token supplied
    by the upstream transport, then the environment variables in ``env_keys``.
    """
    env_value = first_present(*(os.getenv(key) for key in env_keys))
    return first_present(
        _normalise(explicit), _normalise(upstream_token), _normalise(env_value)
    )


def require_api_key(
    explicit: Optional[str] = None,
    upstream_token: Optional[str] = None,
    *,
    env_keys: Sequence[str] = DEFAULT_ENV_KEYS,
) -> str:
    """Like :func:`resolve_api_key` but raise when no credential is available."""
    api_key = resolve_api_key(explicit, upstream_token, env_keys=env_keys)
    if api_key is None:
        raise MissingCredentialError(
            "No API key provided. The tool requires authentication via API key in the "
            f"Authorization header or one of the {', '.join(env_keys)} environment variables."
        )
    return api_key


def _normalise(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    scheme, _, credentials = value.partition(" ")
    if scheme.lower() == _BEARER_SCHEME:
        value = credentials.strip()
    return value or None


__all__ = ["DEFAULT_ENV_KEYS", "require_api_key", "resolve_api_key"]
