from __future__ import annotations

import pytest

from setupgen.auth import DEFAULT_ENV_KEYS
from setupgen.orchestrator import Orchestrator
from setupgen.pricing.store import StaticPricingModelStore
from tests._fixtures.samples import SAMPLE_ANALYSIS


@pytest.fixture(autouse=True)
def _clear_api_key_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep credentials from the developer environment out of the tests."""
    for key in DEFAULT_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sample_analysis() -> str:
    return SAMPLE_ANALYSIS


@pytest.fixture
def orchestrator() -> Orchestrator:
    """Orchestrator backed by the bundled resources and no pricing model."""
    return Orchestrator(pricing_store=StaticPricingModelStore(None))
