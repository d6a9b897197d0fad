"""Fact extraction from agent-written codebase analyses."""

from .classifiers import auth_key, framework_key, location_key
from .extractor import extract_codebase_info

__all__ = ["auth_key", "extract_codebase_info", "framework_key", "location_key"]
