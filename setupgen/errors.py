"""Exception types raised by setupgen components."""

from __future__ import annotations


class SetupGenError(RuntimeError):
    """Base class for setupgen failures."""


class MissingCredentialError(SetupGenError):
    """Raised when no API key can be resolved for an authorized operation."""


class InvalidInputError(SetupGenError):
    """Raised when tool input is structurally unusable."""


class UnknownToolError(SetupGenError):
    """Raised when a caller invokes a tool that is not registered."""


class ResourceError(SetupGenError):
    """Raised when a required static resource cannot be loaded."""


class PricingStoreError(SetupGenError):
    """Raised when the pricing model store cannot be queried."""


class PricingSerializationError(SetupGenError):
    """Raised when a pricing configuration cannot be rendered as YAML."""


__all__ = [
    "InvalidInputError",
    "MissingCredentialError",
    "PricingSerializationError",
    "PricingStoreError",
    "ResourceError",
    "SetupGenError",
    "UnknownToolError",
]
