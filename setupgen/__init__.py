"""Generate tailored billing integration guides from codebase analyses."""

__version__ = "0.1.0"
