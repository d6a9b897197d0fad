"""Tests for extracting codebase facts from analysis documents."""

from __future__ import annotations

import pytest

from setupgen.analysis.extractor import (
    default_codebase_info,
    detect_customer_model,
    extract_codebase_info,
)
from setupgen.models import ExtractedInfo, FilePaths
from tests._fixtures.samples import B2C_ANALYSIS, SAMPLE_ANALYSIS


@pytest.mark.parametrize("document", [None, ""])
def test_absent_document_yields_defaults(document: str | None) -> None:
    info = extract_codebase_info(document)

    assert info == ExtractedInfo()
    assert info.project_structure is None
    assert info.file_paths == FilePaths()


def test_extracts_framework_language_and_auth() -> None:
    info = extract_codebase_info(SAMPLE_ANALYSIS)

    assert info.framework == "Next.js"
    assert info.project_structure == "nextjs"
    assert info.language == "TypeScript"
    assert info.auth_library == "Clerk"
    assert info.auth_config_path == "src/middleware.ts"
    assert info.routing_info == "App Router (`src/app`)"


def test_extracts_file_paths_verbatim() -> None:
    paths = extract_codebase_info(SAMPLE_ANALYSIS).file_paths

    assert paths.lib_path == "src/lib"
    assert paths.server_file == "src/lib/flowglad.ts"
    assert paths.billing_page == "src/app/settings/billing/page.tsx"
    assert paths.mock_billing_path == "src/lib/mock-billing.ts"
    assert paths.pricing_component_path == "src/components/pricing-table.tsx"
    assert paths.env_file == ".env.local"


def test_b2b_marker_selects_organization_id() -> None:
    info = extract_codebase_info(SAMPLE_ANALYSIS)

    assert info.customer_model == "B2B"
    assert info.customer_entity == "organization"
    assert info.customer_id_source == "orgId"


def test_b2c_marker_selects_user_id() -> None:
    info = extract_codebase_info(B2C_ANALYSIS)

    assert info.customer_model == "B2C"
    assert info.customer_entity == "user"
    assert info.customer_id_source == "user.id"


def test_stack_and_additional_details_capture_sections() -> None:
    info = extract_codebase_info(SAMPLE_ANALYSIS)

    assert info.stack_details is not None
    assert info.stack_details.startswith("Where should API routes be mounted?")
    assert "## 3." not in info.stack_details
    assert info.additional_details is not None
    assert "Clerk organizations" in info.additional_details
    assert "Existing Billing Code" not in info.additional_details


def test_react_framework_sets_react_structure() -> None:
    document = SAMPLE_ANALYSIS.replace("- Next.js 14", "- React 18 with Vite")

    info = extract_codebase_info(document)

    assert info.framework == "React"
    assert info.project_structure == "react"


def test_unknown_auth_library_is_kept_verbatim() -> None:
    document = SAMPLE_ANALYSIS.replace("- Clerk (`@clerk/nextjs`)", "- Lucia Auth")

    assert extract_codebase_info(document).auth_library == "Lucia Auth"


def test_javascript_project_gets_js_server_file() -> None:
    document = SAMPLE_ANALYSIS.replace("- TypeScript", "- JavaScript")

    info = extract_codebase_info(document)

    assert info.is_typescript is False
    assert info.file_paths.server_file == "src/lib/flowglad.js"


def test_pages_router_answer() -> None:
    document = SAMPLE_ANALYSIS.replace(
        "- App Router, pages live in `src/app`", "- Pages Router"
    )

    assert extract_codebase_info(document).routing_info == "Pages Router"


def test_unanswered_questions_keep_defaults() -> None:
    document = "# Analysis\n\nWhat framework does the application use?\n\nNo bullets here.\n"

    info = extract_codebase_info(document)

    assert info.framework == "Next.js"
    assert info.auth_library == "unknown"
    assert info.customer_id_source == "user.id"
    assert info.project_structure is None


def test_default_paths_merge_over_builtins() -> None:
    info = default_codebase_info({"env_file": ".env", "not_a_role": "ignored"})

    assert info.file_paths.env_file == ".env"
    assert info.file_paths.lib_path == "src/lib"
    assert not hasattr(info.file_paths, "not_a_role")


def test_detect_customer_model_uses_first_marker() -> None:
    both = "**B2C**: Individual users\n**B2B**: Businesses"
    assert detect_customer_model(both) == "B2C"
    assert detect_customer_model("**B2B**: Businesses\n**B2C**: Individual users") == "B2B"
    assert detect_customer_model("nothing relevant") == "B2C"


def test_absent_document_with_overrides_is_stable() -> None:
    overrides = {"env_file": ".env", "lib_path": "lib"}

    first = extract_codebase_info(None, overrides)
    second = extract_codebase_info(None, overrides)

    assert first == second
    assert first.file_paths.env_file == ".env"
    assert first.file_paths.lib_path == "lib"
    assert first.file_paths.package_file == "package.json"
