"""Builds the token map for the integration template."""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, replace
from typing import Dict, Optional

from ..analysis.classifiers import (
    DEFAULT_AUTH_KEY,
    DEFAULT_LOCATION_KEY,
    auth_key,
    framework_key,
    location_key,
)
from ..fallback import first_present
from ..logging import get_logger
from ..models import FEATURE_TYPE_TOGGLE, ExtractedInfo, FilePaths, PricingConfiguration
from ..snippets.library import FrameworkSnippets, SnippetLibrary
from ..snippets.resolver import resolve_snippets
from .constants import (
    DEFAULT_AUTH_FILE_PATH,
    DEFAULT_CLIENT_PACKAGE,
    DEFAULT_ROUTING_INFO,
    DEFAULT_SERVER_PACKAGE,
    FEATURE_TOGGLE_PLACEHOLDER,
    PRODUCT_NAME_PLACEHOLDER,
    REACT_ROUTING_INFO,
    USAGE_METER_DEFINITION_PLACEHOLDER,
    USAGE_METER_PLACEHOLDER,
)

_LOGGER = get_logger("prompting.builder")

_SOURCE_EXTENSION = re.compile(r"\.(ts|tsx|js|jsx)$")
_CUSTOMER_PREFIX = re.compile(r"^(user\.|session\.user\.)")


@dataclass
class ReplacementContext:
    """Inputs needed to fill the integration template."""

    codebase_info: ExtractedInfo
    snippets: SnippetLibrary
    project_structure: str
    stack_details: str
    additional_details: str = ""
    codebase_analysis: Optional[str] = None
    pricing_model: Optional[PricingConfiguration] = None


def build_template_replacements(context: ReplacementContext) -> Dict[str, str]:
    """Return the full token map for ``context``."""
    info = context.codebase_info
    pricing = context.pricing_model

    frame_key = framework_key(context.project_structure)
    framework = context.snippets.framework(frame_key)
    layout_hint = location_key(context.stack_details, default=None)
    layout_key = layout_hint or DEFAULT_LOCATION_KEY
    paths = effective_file_paths(
        info.file_paths, context.snippets.file_paths.get(layout_hint) if layout_hint else None
    )
    provider_key = resolve_auth_key(info, context.codebase_analysis, context.stack_details)

    usage_meter_slugs = _join([meter.slug for meter in pricing.usage_meters] if pricing else [])
    usage_meter_slugs = usage_meter_slugs or USAGE_METER_PLACEHOLDER
    toggle_slugs = _join(
        [f.slug for f in pricing.features if f.type == FEATURE_TYPE_TOGGLE] if pricing else []
    )
    toggle_slugs = toggle_slugs or FEATURE_TOGGLE_PLACEHOLDER
    product_names = _join(
        [entry.product.display_name for entry in pricing.products] if pricing else []
    )
    product_names = product_names or PRODUCT_NAME_PLACEHOLDER
    meter_definitions = "\n".join(
        f"- {meter.slug}: {meter.name}" for meter in (pricing.usage_meters if pricing else [])
    )

    client_package = framework.provider_pkg if framework else DEFAULT_CLIENT_PACKAGE
    server_package = framework.server_pkg if framework else DEFAULT_SERVER_PACKAGE
    source_extension = "ts" if info.is_typescript else "js"

    if context.project_structure == "nextjs":
        routing_info = first_present(info.routing_info, DEFAULT_ROUTING_INFO)
    else:
        routing_info = REACT_ROUTING_INFO

    replacements: Dict[str, str] = {
        "{FRAMEWORK}": info.framework,
        "{LANGUAGE}": info.language,
        "{FRAMEWORK_ROUTING_INFO}": routing_info,
        "{AUTH_LIBRARY}": info.auth_library,
        "{AUTH_FILE_PATHS}": first_present(info.auth_config_path, DEFAULT_AUTH_FILE_PATH),
        "{CUSTOMER_ENTITY}": info.customer_entity,
        "{CUSTOMER_ID_SOURCE}": info.customer_id_source,
        "{FRONTEND_FRAMEWORK}": info.framework,
        "{FLOWGLAD_CLIENT_PACKAGE}": client_package,
        "{FLOWGLAD_SERVER_PACKAGE}": server_package,
        "{USAGE_METER_EXAMPLES}": usage_meter_slugs,
        "{FEATURE_TOGGLE_EXAMPLES}": toggle_slugs,
        "{USAGE_METER_SLUGS}": usage_meter_slugs,
        "{FEATURE_TOGGLE_SLUGS}": toggle_slugs,
        "{USAGE_EXAMPLES}": usage_meter_slugs,
        "{USAGE_METER_DEFINITIONS}": meter_definitions or USAGE_METER_DEFINITION_PLACEHOLDER,
        "{PRODUCT_NAMES}": product_names,
        "{PACKAGE_FILE}": paths.package_file,
        "{PACKAGE_DEPENDENCIES_CODE}": _dependencies_block(client_package, server_package),
        "{PACKAGE_SCRIPTS_CODE}": "",
        "{FLOWGLAD_SERVER_PATH}": paths.server_file,
        "{FLOWGLAD_ROUTE_PATH}": paths.route_handler,
        "{PROVIDER_COMPONENT_PATH}": f"{paths.lib_path}/providers.tsx",
        "{ROOT_LAYOUT_PATH}": paths.layout_file,
        "{BILLING_PAGE_PATH}": paths.billing_page,
        "{MOCK_BILLING_PATH}": paths.mock_billing_path,
        "{MOCK_BILLING_IMPORT_PATH}": strip_source_extension(paths.mock_billing_path),
        "{BILLING_HELPERS_PATH}": f"{paths.lib_path}/billing-helpers.{source_extension}",
        "{TYPE_SYSTEM}": "TypeScript" if info.is_typescript else "JavaScript",
        "{USAGE_EVENTS_ROUTE_PATH}": f"{paths.api_route_path}/usage-events/route.{source_extension}",
        "{PRICING_COMPONENT_PATH}": paths.pricing_component_path,
        "{NAVBAR_COMPONENT_PATH}": paths.navbar_component_path,
        "{DASHBOARD_COMPONENT_PATH}": paths.dashboard_component_path,
        "{ENV_FILE}": paths.env_file,
        "{ENV_VAR_ACCESS}": paths.env_var_access,
        "{LANGUAGE_EXTENSION}": "typescript" if info.is_typescript else "javascript",
        "{ADDITIONAL_DETAILS}": context.additional_details or "No additional details provided.",
    }

    resolved = resolve_snippets(context.snippets, frame_key)
    auth_snippets = resolved.get(provider_key) if resolved else None
    if auth_snippets and framework and layout_key in context.snippets.file_paths:
        _LOGGER.debug("Using %s/%s snippets for %s layout", frame_key, provider_key, layout_key)
        replacements.update(_library_snippets(auth_snippets, framework))
    else:
        _LOGGER.debug("Snippet library has no %s/%s entry; using fallbacks", frame_key, provider_key)
        replacements.update(_fallback_snippets(info, paths))

    return replacements


def resolve_auth_key(
    info: ExtractedInfo, codebase_analysis: Optional[str], stack_details: Optional[str]
) -> str:
    """Classify the auth provider, preferring the extracted auth library."""
    for source in (info.auth_library, codebase_analysis, stack_details):
        key = auth_key(source)
        if key != DEFAULT_AUTH_KEY:
            return key
    return DEFAULT_AUTH_KEY


def effective_file_paths(extracted: FilePaths, layout: Optional[Dict[str, str]]) -> FilePaths:
    """Apply layout defaults to every role the analysis left at its built-in default."""
    if not layout:
        return extracted
    builtin = asdict(FilePaths())
    current = asdict(extracted)
    overrides = {
        role: path
        for role, path in layout.items()
        if role in builtin and current[role] == builtin[role]
    }
    return replace(extracted, **overrides)


def strip_source_extension(path: str) -> str:
    return _SOURCE_EXTENSION.sub("", path)


def _join(values: list[str]) -> str:
    return ", ".join(value for value in values if value)


def _dependencies_block(client_package: str, server_package: str) -> str:
    dependencies = {client_package: "latest", server_package: "latest"}
    return f"```json\n{json.dumps(dependencies, indent=2)}\n```"


def _library_snippets(snippets: Dict[str, str], framework: FrameworkSnippets) -> Dict[str, str]:
    layout_import = snippets.get("layout_import", "").rstrip()
    layout_provider = snippets.get("layout_provider", "<FlowgladProvider>")
    layout_close = snippets.get("layout_provider_close") or "</FlowgladProvider>"
    provider_section = f"""Add the FlowgladProvider to your root layout:

```tsx
{layout_import}

export default function RootLayout({{ children }}: {{ children: React.ReactNode }}) {{
  return (
    <html>
      <body>
        {layout_provider}
          {{children}}
        {layout_close}
      </body>
    </html>
  )
}}
```"""
    return {
        "{FLOWGLAD_SERVER_CODE}": snippets.get("server_init", "").rstrip(),
        "{FLOWGLAD_ROUTE_CODE}": framework.route_handler.rstrip(),
        "{FRONTEND_PROVIDER_SECTION}": provider_section,
        "{BILLING_HELPERS_CODE}": snippets.get(
            "billing_helpers",
            "// Helper functions for billing UI\n// Add your custom billing helpers here",
        ),
    }


def _fallback_snippets(info: ExtractedInfo, paths: FilePaths) -> Dict[str, str]:
    customer_field = _CUSTOMER_PREFIX.sub("", info.customer_id_source).split(".")[0] or "id"
    server_code = f"""import {{ FlowgladServer }} from '{DEFAULT_SERVER_PACKAGE}'
import {{ getSessionUser }} from '{paths.lib_path}/auth'

export const flowgladServer = new FlowgladServer({{
  apiKey: process.env.FLOWGLAD_SECRET_KEY,
  getRequestingCustomer: async () => {{
    const user = await getSessionUser()
    if (!user) {{
      throw new Error('Unauthorized')
    }}
    return {{
      externalId: user.{customer_field},
      email: user.email,
      name: user.name,
    }}
  }},
}})"""
    route_code = f"""import {{ flowgladServer }} from '{strip_source_extension(paths.server_file)}'

export async function GET(request: Request) {{
  return flowgladServer.handleRequest(request)
}}

export async function POST(request: Request) {{
  return flowgladServer.handleRequest(request)
}}"""
    return {
        "{FLOWGLAD_SERVER_CODE}": server_code,
        "{FLOWGLAD_ROUTE_CODE}": route_code,
        "{FRONTEND_PROVIDER_SECTION}": "Add FlowgladProvider to your root layout.",
        "{BILLING_HELPERS_CODE}": "// Billing helper functions",
    }


__all__ = [
    "ReplacementContext",
    "build_template_replacements",
    "effective_file_paths",
    "resolve_auth_key",
    "strip_source_extension",
]
