"""Adapters that fetch an organization's default pricing model."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

import yaml

from ..errors import PricingStoreError
from ..logging import get_logger
from ..models import PricingConfiguration

_LOGGER = get_logger("pricing.store")


class PricingModelStore(Protocol):
    """Source of the default pricing configuration for a caller."""

    def fetch_default(self, api_key: str) -> Optional[PricingConfiguration]:
        """Return the caller's default configuration, or ``None`` when none exists."""


class StaticPricingModelStore:
    """Serves a fixed configuration; handy for tests and offline runs."""

    def __init__(self, config: PricingConfiguration | None = None) -> None:
        self._config = config

    def fetch_default(self, api_key: str) -> Optional[PricingConfiguration]:
        return self._config


class FilePricingModelStore:
    """Reads a pricing model exported as YAML or JSON."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def fetch_default(self, api_key: str) -> Optional[PricingConfiguration]:
        if not self.path.exists():
            _LOGGER.debug("Pricing model file %s does not exist", self.path)
            return None
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return None
        try:
            if self.path.suffix == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise PricingStoreError(f"Failed to parse {self.path.name}: {exc}") from exc
        return _configuration_from_payload(data)


class HttpPricingModelStore:
    """Fetches the default pricing model from the billing API."""

    DEFAULT_BASE_URL = "https://app.flowglad.com/api/v1"
    ENDPOINT = "pricing-models/default"

    def __init__(self, base_url: str | None = None, *, request_timeout: float = 30.0) -> None:
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.request_timeout = request_timeout

    def fetch_default(self, api_key: str) -> Optional[PricingConfiguration]:
        endpoint = f"{self.base_url}/{self.ENDPOINT}"
        headers = {"Accept": "application/json", "Authorization": f"Bearer {api_key}"}
        request = Request(endpoint, headers=headers, method="GET")

        try:
            with urlopen(request, timeout=self.request_timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            if exc.code == 404:
                return None
            detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
            message = detail.strip() or exc.reason
            raise PricingStoreError(
                f"Pricing model request failed with status {exc.code}: {message}"
            ) from exc
        except URLError as exc:
            raise PricingStoreError(f"Pricing model request failed: {exc.reason}") from exc

        try:
            payload = json.loads(raw.decode("utf-8"))
        except json.JSONDecodeError as exc:
            raise PricingStoreError("Pricing model endpoint returned invalid JSON") from exc
        return _configuration_from_payload(payload)


def _configuration_from_payload(payload: Any) -> Optional[PricingConfiguration]:
    if isinstance(payload, Mapping) and "pricingModel" in payload:
        payload = payload["pricingModel"]
    if payload is None:
        return None
    if not isinstance(payload, Mapping):
        raise PricingStoreError("Pricing model payload must be a mapping")
    return PricingConfiguration.from_dict(payload)


__all__ = [
    "FilePricingModelStore",
    "HttpPricingModelStore",
    "PricingModelStore",
    "StaticPricingModelStore",
]
