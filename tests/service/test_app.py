"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from setupgen.orchestrator import Orchestrator
from setupgen.pricing.store import StaticPricingModelStore
from setupgen.resources import ResourceLoader
from setupgen.service import create_app
from tests._fixtures.samples import pricing_config


@pytest.fixture
def client() -> TestClient:
    store = StaticPricingModelStore(pricing_config(meters=1))
    app = create_app(lambda: Orchestrator(pricing_store=store))
    return TestClient(app)


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_tools_endpoint_lists_schemas(client: TestClient) -> None:
    response = client.get("/tools")
    assert response.status_code == 200
    tools = {tool["name"]: tool for tool in response.json()["tools"]}
    assert set(tools) == {"echo", "getSetupInstructions", "getDefaultPricingModel", "analyzeCodebase"}
    assert "codebaseAnalysis" in tools["getSetupInstructions"]["input_schema"]["properties"]


def test_echo_returns_text_content(client: TestClient) -> None:
    response = client.post("/tools/echo", json={"message": "ping"})
    assert response.status_code == 200
    assert response.json() == {"content": [{"type": "text", "text": "ping"}]}


def test_setup_instructions_use_bearer_token(client: TestClient, sample_analysis: str) -> None:
    response = client.post(
        "/tools/getSetupInstructions",
        json={"codebaseAnalysis": sample_analysis},
        headers={"Authorization": "Bearer sk_test"},
    )
    assert response.status_code == 200
    text = response.json()["content"][0]["text"]
    assert "## Usage-Based Pricing" in text
    assert "```yaml" in text


def test_missing_credential_maps_to_401(client: TestClient) -> None:
    response = client.post("/tools/getDefaultPricingModel", json={})
    assert response.status_code == 401
    assert "No API key provided" in response.json()["detail"]


def test_invalid_input_maps_to_400(client: TestClient) -> None:
    response = client.post("/tools/analyzeCodebase", json={"fileContents": []})
    assert response.status_code == 400


def test_unknown_tool_maps_to_404(client: TestClient) -> None:
    response = client.post("/tools/setupPricingModel", json={})
    assert response.status_code == 404


def test_missing_resource_maps_to_500(tmp_path: Path) -> None:
    app = create_app(
        lambda: Orchestrator(
            resources=ResourceLoader(tmp_path), pricing_store=StaticPricingModelStore(None)
        )
    )
    client = TestClient(app)

    response = client.post(
        "/tools/getSetupInstructions", json={}, headers={"Authorization": "Bearer k"}
    )
    assert response.status_code == 500
