"""Token maps, literal template replacement and document rendering."""

from .builder import ReplacementContext, build_template_replacements
from .replacer import apply_template_replacements

__all__ = [
    "ReplacementContext",
    "apply_template_replacements",
    "build_template_replacements",
]
