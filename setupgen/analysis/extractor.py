"""Extract structured codebase facts from an analysis markdown document."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Mapping, Optional, Pattern

from ..logging import get_logger
from ..models import ExtractedInfo, FilePaths

_LOGGER = get_logger("analysis.extractor")

_FLAGS = re.IGNORECASE

# A question prompt followed by the first ``- answer`` bullet.
_ANSWER = r"[^\n]*\n\s*- ([^\n]+)"


def _question(prompt: str, *, section: str | None = None) -> Pattern[str]:
    prefix = rf"{re.escape(section)}[\s\S]*?" if section else ""
    return re.compile(prefix + re.escape(prompt) + _ANSWER, _FLAGS)


_FRAMEWORK_PATTERN = _question(
    "What framework does the application use?",
    section="## 1. Framework & Language Detection",
)
_LANGUAGE_PATTERN = _question("What language is the server written in?")
_AUTH_PATTERN = _question(
    "What authentication library/system is used?",
    section="## 3. Authentication System",
)
_AUTH_CONFIG_PATTERN = _question("Where is the server-side auth configuration?")
_ROUTING_PATTERN = _question("If Next.js: Is it using App Router or Pages Router?")
_CUSTOMER_ID_B2B_PATTERN = _question(
    "For B2B: What field identifies an organization?", section="Customer ID Source"
)
_CUSTOMER_ID_B2C_PATTERN = _question(
    "For B2C: What field identifies a user?", section="Customer ID Source"
)
_STACK_SECTION_PATTERN = re.compile(
    r"## 2\. File Structure & Paths[^\n]*\n([\s\S]*?)## 3\.", _FLAGS
)
_ADDITIONAL_SECTION_PATTERN = re.compile(
    r"## 4\. Customer Model[^\n]*\n([\s\S]*?)## 5\.", _FLAGS
)
_ROUTER_DIRECTORY_PATTERN = re.compile(r"`([^`]+)`")

B2B_MARKER = "**B2B**: Businesses"
B2C_MARKER = "**B2C**: Individual users"

# File path roles overridden verbatim from the matching answer, in document order.
_PATH_PATTERNS: tuple[tuple[str, Pattern[str]], ...] = (
    ("package_file", _question("What is the name and location of the dependency file?")),
    ("api_route_path", _question("Where should API routes be mounted?")),
    ("components_path", _question("Where are UI components located?")),
    ("route_handler", _question("Where should the billing route handler live?")),
    ("layout_file", _question("Where is the root layout file?")),
    ("billing_page", _question("Where should the billing page live?")),
    ("mock_billing_path", _question("Where is the existing mock billing code?")),
    ("env_file", _question("What is the name of the environment file?")),
    ("env_var_access", _question("How are environment variables accessed?")),
    ("pricing_component_path", _question("Where is the pricing page/component?")),
    ("navbar_component_path", _question("Where is the navbar/account menu component?")),
    (
        "dashboard_component_path",
        _question("Where is the main dashboard/home page component?"),
    ),
)
_LIB_PATTERN = _question("Where are utility functions and shared code located?")

SERVER_FILE_BASENAME = "flowglad"


def default_codebase_info(default_paths: Mapping[str, str] | None = None) -> ExtractedInfo:
    """Return the built-in defaults with ``default_paths`` merged over the path roles."""
    overrides = {
        key: value for key, value in (default_paths or {}).items() if key in FilePaths.roles()
    }
    return ExtractedInfo(file_paths=replace(FilePaths(), **overrides))


def extract_codebase_info(
    codebase_analysis: str | None,
    default_paths: Mapping[str, str] | None = None,
) -> ExtractedInfo:
    """Parse an analysis document into :class:`ExtractedInfo`.

    Every fact starts from its built-in default and is only overridden when
    the matching question in the document carries an answer. The function
    never raises on malformed input.
    """
    info = default_codebase_info(default_paths)
    if not codebase_analysis:
        return info

    text = codebase_analysis

    framework_text = _answer(_FRAMEWORK_PATTERN, text)
    if framework_text:
        lower = framework_text.lower()
        if "next.js" in lower or "nextjs" in lower:
            info.project_structure = "nextjs"
            info.framework = "Next.js"
        elif "react" in lower:
            info.project_structure = "react"
            info.framework = "React"

    language = _answer(_LANGUAGE_PATTERN, text)
    if language:
        info.language = language

    auth_text = _answer(_AUTH_PATTERN, text)
    if auth_text:
        info.auth_library = _canonical_auth_library(auth_text)

    auth_config = _answer(_AUTH_CONFIG_PATTERN, text)
    if auth_config:
        info.auth_config_path = _strip_code(auth_config)

    routing = _answer(_ROUTING_PATTERN, text)
    if routing:
        info.routing_info = _canonical_routing(routing)

    info.customer_model = detect_customer_model(text)

    customer_id = None
    if info.customer_model == "B2B":
        customer_id = _answer(_CUSTOMER_ID_B2B_PATTERN, text)
    customer_id = customer_id or _answer(_CUSTOMER_ID_B2C_PATTERN, text)
    if customer_id:
        info.customer_id_source = _strip_code(customer_id)

    stack_match = _STACK_SECTION_PATTERN.search(text)
    if stack_match:
        info.stack_details = stack_match.group(1).strip() or None

    additional_match = _ADDITIONAL_SECTION_PATTERN.search(text)
    if additional_match:
        info.additional_details = additional_match.group(1).strip() or None

    lib_path = _answer(_LIB_PATTERN, text)
    if lib_path:
        info.file_paths.lib_path = _strip_code(lib_path).rstrip("/")
        extension = "ts" if info.is_typescript else "js"
        info.file_paths.server_file = (
            f"{info.file_paths.lib_path}/{SERVER_FILE_BASENAME}.{extension}"
        )

    for role, pattern in _PATH_PATTERNS:
        value = _answer(pattern, text)
        if value:
            setattr(info.file_paths, role, _strip_code(value))

    _LOGGER.debug(
        "Extracted framework=%s language=%s auth=%s customer_model=%s",
        info.framework,
        info.language,
        info.auth_library,
        info.customer_model,
    )
    return info


def detect_customer_model(text: str) -> str:
    """Return ``B2B`` when the business marker precedes the individual marker."""
    b2b_index = text.find(B2B_MARKER)
    b2c_index = text.find(B2C_MARKER)
    if b2b_index != -1 and (b2c_index == -1 or b2b_index < b2c_index):
        return "B2B"
    return "B2C"


def _answer(pattern: Pattern[str], text: str) -> Optional[str]:
    match = pattern.search(text)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def _strip_code(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value.startswith("`") and value.endswith("`"):
        return value[1:-1].strip()
    return value


def _canonical_auth_library(text: str) -> str:
    lower = text.lower()
    if "clerk" in lower:
        return "Clerk"
    if "supabase" in lower:
        return "Supabase"
    if "nextauth" in lower or "next-auth" in lower:
        return "NextAuth"
    return text.strip()


def _canonical_routing(text: str) -> str:
    router = "Pages Router" if "pages router" in text.lower() else "App Router"
    directory = _ROUTER_DIRECTORY_PATTERN.search(text)
    if directory:
        return f"{router} (`{directory.group(1)}`)"
    return router


__all__ = [
    "B2B_MARKER",
    "B2C_MARKER",
    "default_codebase_info",
    "detect_customer_model",
    "extract_codebase_info",
]
