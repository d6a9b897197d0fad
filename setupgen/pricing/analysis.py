"""Detect optional pricing features and compose the matching instructions."""

from __future__ import annotations

from typing import List, Optional

from ..models import FEATURE_TYPE_TOGGLE, PricingAnalysis, PricingConfiguration
from ..prompting.constants import DEFAULT_CLIENT_PACKAGE, DEFAULT_SERVER_PACKAGE
from ..prompting.rendering import DocumentRenderer

_BLOCK_TEMPLATES = (
    ("has_trials", "pricing/trials.md.j2"),
    ("has_usage_meters", "pricing/usage_meters.md.j2"),
    ("has_toggle_features", "pricing/toggle_features.md.j2"),
)


def analyze_pricing_model(config: PricingConfiguration) -> PricingAnalysis:
    """Return which optional feature categories ``config`` uses.

    A price counts as a trial whenever ``trial_period_days`` is not ``None``,
    so a zero-day trial still counts.
    """
    has_trials = any(
        price.trial_period_days is not None
        for entry in config.products
        for price in entry.prices
    )
    has_usage_meters = len(config.usage_meters) > 0
    has_toggle_features = any(feature.type == FEATURE_TYPE_TOGGLE for feature in config.features)
    return PricingAnalysis(
        has_trials=has_trials,
        has_usage_meters=has_usage_meters,
        has_toggle_features=has_toggle_features,
    )


def compose_pricing_instructions(
    config: PricingConfiguration,
    analysis: PricingAnalysis,
    *,
    client_package: str = DEFAULT_CLIENT_PACKAGE,
    server_package: str = DEFAULT_SERVER_PACKAGE,
    renderer: Optional[DocumentRenderer] = None,
) -> str:
    """Concatenate the trial, usage and toggle blocks enabled by ``analysis``."""
    renderer = renderer or DocumentRenderer()
    context = {
        "client_package": client_package,
        "server_package": server_package,
        "trial_prices": [
            {
                "product": entry.product.display_name,
                "price": price.name or price.slug or price.type,
                "days": price.trial_period_days,
            }
            for entry in config.products
            for price in entry.prices
            if price.trial_period_days is not None
        ],
        "usage_meters": config.usage_meters,
        "toggle_features": [
            feature for feature in config.features if feature.type == FEATURE_TYPE_TOGGLE
        ],
    }

    sections: List[str] = []
    for flag, template_name in _BLOCK_TEMPLATES:
        if getattr(analysis, flag):
            sections.append(renderer.render(template_name, **context).strip() + "\n")
    return "\n\n".join(sections)


__all__ = ["analyze_pricing_model", "compose_pricing_instructions"]
