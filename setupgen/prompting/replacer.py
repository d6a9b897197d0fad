"""Literal placeholder substitution for the integration template."""

from __future__ import annotations

import re
from typing import Mapping

TokenMap = Mapping[str, str]


def apply_template_replacements(template: str, replacements: TokenMap) -> str:
    """Replace every occurrence of each token key in ``template``.

    Keys are matched as literal text. Substitution is a single pass over the
    template: replacement values are inserted verbatim and never scanned for
    further tokens, so a value that contains a token key is emitted as-is.
    """
    keys = [key for key in replacements if key]
    if not keys or not template:
        return template

    # Longest first so overlapping keys resolve to the most specific token.
    keys.sort(key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(key) for key in keys))
    return pattern.sub(lambda match: str(replacements[match.group(0)]), template)


__all__ = ["TokenMap", "apply_template_replacements"]
