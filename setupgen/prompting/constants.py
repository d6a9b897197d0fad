"""Shared constants for integration guide generation."""

from __future__ import annotations

from typing import Literal, get_args

TOKENS: tuple[str, ...] = (
    "{FRAMEWORK}",
    "{LANGUAGE}",
    "{FRAMEWORK_ROUTING_INFO}",
    "{AUTH_LIBRARY}",
    "{AUTH_FILE_PATHS}",
    "{CUSTOMER_ENTITY}",
    "{CUSTOMER_ID_SOURCE}",
    "{FRONTEND_FRAMEWORK}",
    "{FLOWGLAD_CLIENT_PACKAGE}",
    "{FLOWGLAD_SERVER_PACKAGE}",
    "{USAGE_METER_EXAMPLES}",
    "{FEATURE_TOGGLE_EXAMPLES}",
    "{USAGE_METER_SLUGS}",
    "{FEATURE_TOGGLE_SLUGS}",
    "{USAGE_EXAMPLES}",
    "{USAGE_METER_DEFINITIONS}",
    "{PRODUCT_NAMES}",
    "{PACKAGE_FILE}",
    "{PACKAGE_DEPENDENCIES_CODE}",
    "{PACKAGE_SCRIPTS_CODE}",
    "{FLOWGLAD_SERVER_PATH}",
    "{FLOWGLAD_SERVER_CODE}",
    "{FLOWGLAD_ROUTE_PATH}",
    "{FLOWGLAD_ROUTE_CODE}",
    "{PROVIDER_COMPONENT_PATH}",
    "{FRONTEND_PROVIDER_SECTION}",
    "{ROOT_LAYOUT_PATH}",
    "{BILLING_PAGE_PATH}",
    "{MOCK_BILLING_PATH}",
    "{MOCK_BILLING_IMPORT_PATH}",
    "{BILLING_HELPERS_PATH}",
    "{BILLING_HELPERS_CODE}",
    "{TYPE_SYSTEM}",
    "{USAGE_EVENTS_ROUTE_PATH}",
    "{PRICING_COMPONENT_PATH}",
    "{NAVBAR_COMPONENT_PATH}",
    "{DASHBOARD_COMPONENT_PATH}",
    "{ENV_FILE}",
    "{ENV_VAR_ACCESS}",
    "{LANGUAGE_EXTENSION}",
    "{ADDITIONAL_DETAILS}",
)

DEFAULT_PROJECT_STRUCTURE = "nextjs"
DEFAULT_STACK_DETAILS = "No stack details provided."
DEFAULT_AUTH_FILE_PATH = "src/lib/auth.ts"
DEFAULT_CLIENT_PACKAGE = "@flowglad/nextjs"
DEFAULT_SERVER_PACKAGE = "@flowglad/server"
DEFAULT_ROUTING_INFO = "App Router"
REACT_ROUTING_INFO = "Standard React routing"

USAGE_METER_PLACEHOLDER = "usage_meter_slug"
FEATURE_TOGGLE_PLACEHOLDER = "feature_slug"
PRODUCT_NAME_PLACEHOLDER = "Product Name"
USAGE_METER_DEFINITION_PLACEHOLDER = "- usage_meter_slug: Usage Meter Name"

PricingComponent = Literal[
    "feature_access",
    "usage_based",
    "subscription",
    "one_time",
    "free_trial_by_time",
    "free_trial_by_credit",
    "discount",
]
PRICING_COMPONENTS: tuple[str, ...] = get_args(PricingComponent)

NO_PRICING_MODEL_MESSAGE = (
    "No default pricing model found for your organization. "
    "You can set up your pricing model in the Flowglad dashboard."
)
PRICING_SERIALIZATION_FAILED_MESSAGE = (
    "Failed to generate YAML from pricing model data. Please check the logs for errors."
)


__all__ = [
    "DEFAULT_AUTH_FILE_PATH",
    "DEFAULT_CLIENT_PACKAGE",
    "DEFAULT_PROJECT_STRUCTURE",
    "DEFAULT_ROUTING_INFO",
    "DEFAULT_SERVER_PACKAGE",
    "DEFAULT_STACK_DETAILS",
    "FEATURE_TOGGLE_PLACEHOLDER",
    "NO_PRICING_MODEL_MESSAGE",
    "PRICING_COMPONENTS",
    "PRICING_SERIALIZATION_FAILED_MESSAGE",
    "PricingComponent",
    "PRODUCT_NAME_PLACEHOLDER",
    "REACT_ROUTING_INFO",
    "TOKENS",
    "USAGE_METER_DEFINITION_PLACEHOLDER",
    "USAGE_METER_PLACEHOLDER",
]
