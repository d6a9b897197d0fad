"""Pricing model analysis, instruction composition and persistence adapters."""

from .analysis import analyze_pricing_model, compose_pricing_instructions
from .serializer import serialize_pricing_model
from .store import (
    FilePricingModelStore,
    HttpPricingModelStore,
    PricingModelStore,
    StaticPricingModelStore,
)

__all__ = [
    "FilePricingModelStore",
    "HttpPricingModelStore",
    "PricingModelStore",
    "StaticPricingModelStore",
    "analyze_pricing_model",
    "compose_pricing_instructions",
    "serialize_pricing_model",
]
