"""Tests for setupgen.orchestrator."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from setupgen.config import load_config
from setupgen.errors import (
    InvalidInputError,
    MissingCredentialError,
    PricingSerializationError,
    PricingStoreError,
    ResourceError,
)
from setupgen.models import FileContent, PricingConfiguration
from setupgen.orchestrator import Orchestrator, SetupInstructionsRequest
from setupgen.pricing.store import FilePricingModelStore, StaticPricingModelStore
from setupgen.prompting.constants import (
    NO_PRICING_MODEL_MESSAGE,
    PRICING_SERIALIZATION_FAILED_MESSAGE,
    TOKENS,
)
from setupgen.resources import ResourceLoader
from tests._fixtures.samples import pricing_config


class FailingStore:
    """Pricing store double that always errors."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def fetch_default(self, api_key: str) -> PricingConfiguration | None:
        self.calls.append(api_key)
        raise PricingStoreError("billing API unavailable")


def _instructions(orchestrator: Orchestrator, **kwargs) -> str:
    return orchestrator.get_setup_instructions(
        SetupInstructionsRequest(**kwargs), api_key="sk_test"
    )


def test_file_contents_without_analysis_request_an_analysis(orchestrator: Orchestrator) -> None:
    output = _instructions(
        orchestrator,
        pricing_components=["subscription", "usage_based"],
        file_contents=[FileContent(path="src/app/page.tsx", content="export default 1")],
    )

    assert output.startswith("# Codebase Analysis Required")
    assert "`codebaseAnalysis`" in output
    assert '`pricingComponents`: ["subscription", "usage_based"]' in output
    assert "## File: src/app/page.tsx" in output
    assert "**Files Analyzed:** 1" in output
    assert "# Integrating Flowglad Billing" not in output


def test_absent_pricing_model_reports_status(
    orchestrator: Orchestrator, sample_analysis: str
) -> None:
    output = _instructions(orchestrator, codebase_analysis=sample_analysis)

    assert output.startswith("# Codebase Analysis\n")
    assert "# Flowglad Integration Instructions" in output
    assert "## Pricing Model Status" in output
    assert NO_PRICING_MODEL_MESSAGE in output
    assert "```yaml" not in output
    assert "## Free Trials" not in output
    assert output.endswith("\n")


def test_all_tokens_are_replaced(orchestrator: Orchestrator, sample_analysis: str) -> None:
    output = _instructions(orchestrator, codebase_analysis=sample_analysis)

    for token in TOKENS:
        assert token not in output
    assert "`orgId`" in output
    assert "src/app/settings/billing/page.tsx" in output


def test_toggle_only_model_adds_feature_access_block(sample_analysis: str) -> None:
    orchestrator = Orchestrator(pricing_store=StaticPricingModelStore(pricing_config(toggles=1)))

    output = _instructions(orchestrator, codebase_analysis=sample_analysis)

    assert "# Pricing Model Configuration" in output
    assert "```yaml\nname: Default Pricing" in output
    assert "## Feature Access (Toggle Features)" in output
    assert "## Free Trials" not in output
    assert "## Usage-Based Pricing" not in output
    assert NO_PRICING_MODEL_MESSAGE not in output
    assert output.index("```yaml") < output.index("## Feature Access")


def test_full_model_orders_pricing_blocks(sample_analysis: str) -> None:
    config = pricing_config(trial_days=14, meters=1, toggles=1)
    orchestrator = Orchestrator(pricing_store=StaticPricingModelStore(config))

    output = _instructions(orchestrator, codebase_analysis=sample_analysis)

    assert (
        output.index("## Free Trials")
        < output.index("## Usage-Based Pricing")
        < output.index("## Feature Access (Toggle Features)")
    )
    assert "api_calls_0" in output


def test_serialization_failure_reports_distinct_status(
    monkeypatch: pytest.MonkeyPatch, sample_analysis: str
) -> None:
    def _fail(config):
        raise PricingSerializationError("cannot represent")

    monkeypatch.setattr("setupgen.orchestrator.serialize_pricing_model", _fail)
    orchestrator = Orchestrator(pricing_store=StaticPricingModelStore(pricing_config(toggles=1)))

    output = _instructions(orchestrator, codebase_analysis=sample_analysis)

    assert PRICING_SERIALIZATION_FAILED_MESSAGE in output
    assert NO_PRICING_MODEL_MESSAGE not in output
    assert "```yaml" not in output
    assert "## Feature Access (Toggle Features)" in output


def test_store_failure_is_treated_as_absent(sample_analysis: str) -> None:
    store = FailingStore()
    orchestrator = Orchestrator(pricing_store=store)

    output = _instructions(orchestrator, codebase_analysis=sample_analysis)

    assert store.calls == ["sk_test"]
    assert NO_PRICING_MODEL_MESSAGE in output


def test_missing_credential_is_fatal(orchestrator: Orchestrator, sample_analysis: str) -> None:
    with pytest.raises(MissingCredentialError):
        orchestrator.get_setup_instructions(
            SetupInstructionsRequest(codebase_analysis=sample_analysis)
        )
    with pytest.raises(MissingCredentialError):
        orchestrator.get_setup_instructions(
            SetupInstructionsRequest(file_contents=[FileContent("a.ts", "x")])
        )


def test_upstream_token_and_environment_are_accepted(
    orchestrator: Orchestrator, monkeypatch: pytest.MonkeyPatch
) -> None:
    request = SetupInstructionsRequest()

    assert orchestrator.get_setup_instructions(request, upstream_token="Bearer abc")
    monkeypatch.setenv("MCP_API_KEY", "env-key")
    assert orchestrator.get_setup_instructions(request)


def test_missing_resource_is_fatal(tmp_path: Path, sample_analysis: str) -> None:
    orchestrator = Orchestrator(
        resources=ResourceLoader(tmp_path), pricing_store=StaticPricingModelStore(None)
    )

    with pytest.raises(ResourceError):
        _instructions(orchestrator, codebase_analysis=sample_analysis)


def test_without_analysis_uses_defaults(orchestrator: Orchestrator) -> None:
    output = _instructions(orchestrator)

    assert output.startswith("# Integrating Flowglad Billing")
    assert "# Codebase Analysis" not in output
    assert "`src/app/layout.tsx`" in output
    assert "No additional details provided." in output


def test_explicit_stack_details_select_layout(orchestrator: Orchestrator) -> None:
    output = _instructions(
        orchestrator,
        stack_details="Pages Router project; pages/ holds every route.",
        additional_details="Seats are billed per workspace.",
    )

    assert "`pages/_app.tsx`" in output
    assert "Seats are billed per workspace." in output


def test_explicit_project_structure_overrides_analysis(
    orchestrator: Orchestrator, sample_analysis: str
) -> None:
    output = _instructions(
        orchestrator, codebase_analysis=sample_analysis, project_structure="react"
    )

    assert "Standard React routing" in output
    assert "@flowglad/react" in output


def test_analyze_codebase_bundles_prompt_and_files(orchestrator: Orchestrator) -> None:
    output = orchestrator.analyze_codebase(
        [
            {"path": "package.json", "content": '{"name": "app"}'},
            {"path": "", "content": "ignored"},
            FileContent(path="src/lib/auth.ts", content="export const auth = {}"),
        ],
        project_root="/work/app",
    )

    assert "## 1. Framework & Language Detection" in output
    assert "**Project Root:** /work/app" in output
    assert "**Files Analyzed:** 2" in output
    assert "## File: package.json" in output
    assert "## File: src/lib/auth.ts" in output
    assert output.rstrip().endswith("ready to be used as context for generating a Flowglad integration guide.")


@pytest.mark.parametrize(
    ("files", "message"),
    [
        (None, "fileContents is required"),
        ([], "Empty array"),
        ([{"path": "a.ts"}], "none had valid path and content"),
    ],
)
def test_analyze_codebase_rejects_unusable_input(
    orchestrator: Orchestrator, files, message: str
) -> None:
    with pytest.raises(InvalidInputError, match=message):
        orchestrator.analyze_codebase(files)


def test_default_pricing_model_as_json() -> None:
    orchestrator = Orchestrator(pricing_store=StaticPricingModelStore(pricing_config(meters=1)))

    output = orchestrator.get_default_pricing_model(api_key="sk_test")

    prefix = "Default pricing model: "
    assert output.startswith(prefix)
    payload = json.loads(output[len(prefix):])
    assert payload["usageMeters"][0]["slug"] == "api_calls_0"


def test_default_pricing_model_absent(orchestrator: Orchestrator) -> None:
    assert orchestrator.get_default_pricing_model(api_key="k") == "Default pricing model: {}"


def test_default_pricing_model_requires_credential(orchestrator: Orchestrator) -> None:
    with pytest.raises(MissingCredentialError):
        orchestrator.get_default_pricing_model()


def test_from_config_wires_file_store(tmp_path: Path) -> None:
    (tmp_path / ".setupgen.yml").write_text(
        "pricing:\n  source: file\n  file: pricing.yml\n", encoding="utf-8"
    )

    orchestrator = Orchestrator.from_config(load_config(tmp_path))

    assert isinstance(orchestrator.pricing_store, FilePricingModelStore)
    assert orchestrator.pricing_store.path == tmp_path.resolve() / "pricing.yml"


def test_unusable_files_without_analysis_still_redirect(orchestrator: Orchestrator) -> None:
    output = _instructions(
        orchestrator,
        pricing_components=["subscription"],
        file_contents=[FileContent(path="", content="x")],
    )

    assert output.startswith("# Codebase Analysis Required")
    assert "`codebaseAnalysis`" in output
    assert "No valid files provided for analysis" in output
