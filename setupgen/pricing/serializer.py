"""Render pricing configurations as YAML."""

from __future__ import annotations

import yaml

from ..errors import PricingSerializationError
from ..models import PricingConfiguration


def serialize_pricing_model(config: PricingConfiguration) -> str:
    """Return ``config`` as block-style YAML, preserving collection order."""
    try:
        return yaml.safe_dump(
            config.to_dict(),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as exc:
        raise PricingSerializationError(f"Failed to serialize pricing model: {exc}") from exc


__all__ = ["serialize_pricing_model"]
