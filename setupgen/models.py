"""Core data models shared across setupgen components."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional

FEATURE_TYPE_TOGGLE = "toggle"
FEATURE_TYPE_USAGE_CREDIT_GRANT = "usage_credit_grant"
FEATURE_TYPE_RESOURCE = "resource"
FEATURE_TYPES: tuple[str, ...] = (
    FEATURE_TYPE_TOGGLE,
    FEATURE_TYPE_USAGE_CREDIT_GRANT,
    FEATURE_TYPE_RESOURCE,
)


@dataclass
class FilePaths:
    """Logical file locations in the target application."""

    api_route_path: str = "src/app/api"
    lib_path: str = "src/lib"
    components_path: str = "src/components"
    server_file: str = "src/lib/flowglad.ts"
    route_handler: str = "src/app/api/flowglad/[...path]/route.ts"
    layout_file: str = "src/app/layout.tsx"
    billing_page: str = "src/app/billing/page.tsx"
    package_file: str = "package.json"
    env_file: str = ".env.local"
    env_var_access: str = "process.env.VAR_NAME"
    mock_billing_path: str = "src/lib/billing.ts"
    pricing_component_path: str = "src/components/pricing.tsx"
    navbar_component_path: str = "src/components/navbar.tsx"
    dashboard_component_path: str = "src/app/dashboard/page.tsx"

    @classmethod
    def roles(cls) -> List[str]:
        return [item.name for item in fields(cls)]


@dataclass
class ExtractedInfo:
    """Facts about the target codebase pulled from an analysis document."""

    framework: str = "Next.js"
    language: str = "TypeScript"
    auth_library: str = "unknown"
    customer_model: str = "B2C"
    customer_id_source: str = "user.id"
    project_structure: Optional[str] = None
    stack_details: Optional[str] = None
    additional_details: Optional[str] = None
    auth_config_path: Optional[str] = None
    routing_info: Optional[str] = None
    file_paths: FilePaths = field(default_factory=FilePaths)

    @property
    def is_typescript(self) -> bool:
        return "TypeScript" in self.language

    @property
    def customer_entity(self) -> str:
        return "organization" if self.customer_model == "B2B" else "user"


@dataclass
class FileContent:
    """A single source file handed over for analysis."""

    path: str
    content: str


@dataclass
class UsageMeter:
    slug: str
    name: str
    aggregation_type: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Feature:
    type: str
    slug: str
    name: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[int] = None
    usage_meter_slug: Optional[str] = None
    renewal_frequency: Optional[str] = None
    active: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Price:
    type: str
    slug: Optional[str] = None
    name: Optional[str] = None
    unit_price: Optional[int] = None
    interval_unit: Optional[str] = None
    interval_count: Optional[int] = None
    # Unparseable values are kept verbatim; any non-null value marks a trial.
    trial_period_days: Any = None
    usage_meter_slug: Optional[str] = None
    is_default: bool = False
    active: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Product:
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    default: bool = False
    active: bool = True
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.name or self.slug or "Product"


@dataclass
class ProductEntry:
    """A product together with its prices and granted feature slugs."""

    product: Product
    prices: List[Price] = field(default_factory=list)
    features: List[str] = field(default_factory=list)


@dataclass
class PricingConfiguration:
    """Read-only snapshot of an organization's default pricing model."""

    name: Optional[str] = None
    is_default: bool = True
    products: List[ProductEntry] = field(default_factory=list)
    features: List[Feature] = field(default_factory=list)
    usage_meters: List[UsageMeter] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PricingConfiguration":
        """Build a configuration from snake_case or camelCase mappings."""
        return cls(
            name=_as_optional_str(_pick(data, "name")),
            is_default=bool(_pick(data, "is_default", "isDefault", default=True)),
            products=[_product_entry(item) for item in _as_list(_pick(data, "products"))],
            features=[_feature(item) for item in _as_list(_pick(data, "features"))],
            usage_meters=[
                _usage_meter(item) for item in _as_list(_pick(data, "usage_meters", "usageMeters"))
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain mapping suitable for YAML or JSON rendering."""
        return {
            "name": self.name,
            "isDefault": self.is_default,
            "products": [_product_entry_to_dict(entry) for entry in self.products],
            "features": [_feature_to_dict(feature) for feature in self.features],
            "usageMeters": [_usage_meter_to_dict(meter) for meter in self.usage_meters],
        }


@dataclass(frozen=True)
class PricingAnalysis:
    """Optional feature categories present in a pricing configuration."""

    has_trials: bool
    has_usage_meters: bool
    has_toggle_features: bool


_PRICE_KEYS = {
    "type": ("type",),
    "slug": ("slug",),
    "name": ("name",),
    "unit_price": ("unit_price", "unitPrice"),
    "interval_unit": ("interval_unit", "intervalUnit"),
    "interval_count": ("interval_count", "intervalCount"),
    "trial_period_days": ("trial_period_days", "trialPeriodDays"),
    "usage_meter_slug": ("usage_meter_slug", "usageMeterSlug"),
    "is_default": ("is_default", "isDefault"),
    "active": ("active",),
}

_FEATURE_KEYS = {
    "type": ("type",),
    "slug": ("slug",),
    "name": ("name",),
    "description": ("description",),
    "amount": ("amount",),
    "usage_meter_slug": ("usage_meter_slug", "usageMeterSlug"),
    "renewal_frequency": ("renewal_frequency", "renewalFrequency"),
    "active": ("active",),
}

_PRODUCT_KEYS = {
    "name": ("name",),
    "slug": ("slug",),
    "description": ("description",),
    "default": ("default",),
    "active": ("active",),
}

_METER_KEYS = {
    "slug": ("slug",),
    "name": ("name",),
    "aggregation_type": ("aggregation_type", "aggregationType"),
}


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_optional_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def _as_optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_int_or_raw(value: Any) -> Any:
    if value is None:
        return None
    parsed = _as_optional_int(value)
    return parsed if parsed is not None else value


def _extra(data: Mapping[str, Any], known: Mapping[str, tuple[str, ...]]) -> Dict[str, Any]:
    consumed = {alias for aliases in known.values() for alias in aliases}
    return {key: value for key, value in data.items() if key not in consumed}


def _usage_meter(raw: Any) -> UsageMeter:
    data = _as_mapping(raw)
    return UsageMeter(
        slug=str(_pick(data, "slug", default="")),
        name=str(_pick(data, "name", default="")),
        aggregation_type=_as_optional_str(_pick(data, *_METER_KEYS["aggregation_type"])),
        extra=_extra(data, _METER_KEYS),
    )


def _feature(raw: Any) -> Feature:
    data = _as_mapping(raw)
    return Feature(
        type=str(_pick(data, "type", default="")),
        slug=str(_pick(data, "slug", default="")),
        name=_as_optional_str(_pick(data, "name")),
        description=_as_optional_str(_pick(data, "description")),
        amount=_as_optional_int(_pick(data, "amount")),
        usage_meter_slug=_as_optional_str(_pick(data, *_FEATURE_KEYS["usage_meter_slug"])),
        renewal_frequency=_as_optional_str(_pick(data, *_FEATURE_KEYS["renewal_frequency"])),
        active=bool(_pick(data, "active", default=True)),
        extra=_extra(data, _FEATURE_KEYS),
    )


def _price(raw: Any) -> Price:
    data = _as_mapping(raw)
    return Price(
        type=str(_pick(data, "type", default="")),
        slug=_as_optional_str(_pick(data, "slug")),
        name=_as_optional_str(_pick(data, "name")),
        unit_price=_as_optional_int(_pick(data, *_PRICE_KEYS["unit_price"])),
        interval_unit=_as_optional_str(_pick(data, *_PRICE_KEYS["interval_unit"])),
        interval_count=_as_optional_int(_pick(data, *_PRICE_KEYS["interval_count"])),
        trial_period_days=_as_int_or_raw(_pick(data, *_PRICE_KEYS["trial_period_days"])),
        usage_meter_slug=_as_optional_str(_pick(data, *_PRICE_KEYS["usage_meter_slug"])),
        is_default=bool(_pick(data, *_PRICE_KEYS["is_default"], default=False)),
        active=bool(_pick(data, "active", default=True)),
        extra=_extra(data, _PRICE_KEYS),
    )


def _product_entry(raw: Any) -> ProductEntry:
    data = _as_mapping(raw)
    product_data = _as_mapping(data.get("product"))
    product = Product(
        name=_as_optional_str(_pick(product_data, "name")),
        slug=_as_optional_str(_pick(product_data, "slug")),
        description=_as_optional_str(_pick(product_data, "description")),
        default=bool(_pick(product_data, "default", default=False)),
        active=bool(_pick(product_data, "active", default=True)),
        extra=_extra(product_data, _PRODUCT_KEYS),
    )
    return ProductEntry(
        product=product,
        prices=[_price(item) for item in _as_list(data.get("prices"))],
        features=[str(item) for item in _as_list(data.get("features"))],
    )


def _usage_meter_to_dict(meter: UsageMeter) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"slug": meter.slug, "name": meter.name}
    if meter.aggregation_type is not None:
        payload["aggregationType"] = meter.aggregation_type
    payload.update(meter.extra)
    return payload


def _feature_to_dict(feature: Feature) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"type": feature.type, "slug": feature.slug}
    optional = {
        "name": feature.name,
        "description": feature.description,
        "amount": feature.amount,
        "usageMeterSlug": feature.usage_meter_slug,
        "renewalFrequency": feature.renewal_frequency,
    }
    payload.update({key: value for key, value in optional.items() if value is not None})
    payload["active"] = feature.active
    payload.update(feature.extra)
    return payload


def _price_to_dict(price: Price) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"type": price.type}
    optional = {
        "slug": price.slug,
        "name": price.name,
        "unitPrice": price.unit_price,
        "intervalUnit": price.interval_unit,
        "intervalCount": price.interval_count,
        "trialPeriodDays": price.trial_period_days,
        "usageMeterSlug": price.usage_meter_slug,
    }
    payload.update({key: value for key, value in optional.items() if value is not None})
    payload["isDefault"] = price.is_default
    payload["active"] = price.active
    payload.update(price.extra)
    return payload


def _product_entry_to_dict(entry: ProductEntry) -> Dict[str, Any]:
    product = entry.product
    product_payload: Dict[str, Any] = {
        key: value
        for key, value in {
            "name": product.name,
            "slug": product.slug,
            "description": product.description,
        }.items()
        if value is not None
    }
    product_payload["default"] = product.default
    product_payload["active"] = product.active
    product_payload.update(product.extra)
    return {
        "product": product_payload,
        "prices": [_price_to_dict(price) for price in entry.prices],
        "features": list(entry.features),
    }


__all__ = [
    "ExtractedInfo",
    "FEATURE_TYPES",
    "FEATURE_TYPE_RESOURCE",
    "FEATURE_TYPE_TOGGLE",
    "FEATURE_TYPE_USAGE_CREDIT_GRANT",
    "Feature",
    "FileContent",
    "FilePaths",
    "Price",
    "PricingAnalysis",
    "PricingConfiguration",
    "Product",
    "ProductEntry",
    "UsageMeter",
]
