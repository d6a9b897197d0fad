"""Pipeline orchestration for analysis delegation and setup instructions."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from .analysis.classifiers import framework_key
from .analysis.extractor import extract_codebase_info
from .auth import DEFAULT_ENV_KEYS, require_api_key
from .config import SetupGenConfig, load_config
from .errors import InvalidInputError, PricingSerializationError
from .fallback import first_present
from .logging import get_logger
from .models import FileContent, PricingAnalysis, PricingConfiguration
from .pricing.analysis import analyze_pricing_model, compose_pricing_instructions
from .pricing.serializer import serialize_pricing_model
from .pricing.store import (
    FilePricingModelStore,
    HttpPricingModelStore,
    PricingModelStore,
    StaticPricingModelStore,
)
from .prompting.builder import ReplacementContext, build_template_replacements
from .prompting.constants import (
    DEFAULT_CLIENT_PACKAGE,
    DEFAULT_PROJECT_STRUCTURE,
    DEFAULT_SERVER_PACKAGE,
    DEFAULT_STACK_DETAILS,
    NO_PRICING_MODEL_MESSAGE,
    PRICING_SERIALIZATION_FAILED_MESSAGE,
)
from .prompting.rendering import DocumentRenderer
from .prompting.replacer import apply_template_replacements
from .resources import (
    ANALYSIS_PROMPT_FILENAME,
    SNIPPETS_FILENAME,
    TEMPLATE_FILENAME,
    ResourceLoader,
)

FileInput = Union[FileContent, Mapping[str, Any]]


@dataclass
class SetupInstructionsRequest:
    """Inputs accepted by the setup instructions operation."""

    pricing_components: List[str] = field(default_factory=list)
    file_contents: Optional[List[FileInput]] = None
    codebase_analysis: Optional[str] = None
    project_structure: Optional[str] = None
    stack_details: Optional[str] = None
    additional_details: Optional[str] = None


@dataclass
class PricingModelOutcome:
    """Result of fetching and preparing the default pricing model."""

    config: Optional[PricingConfiguration] = None
    yaml: Optional[str] = None
    analysis: Optional[PricingAnalysis] = None
    status: Optional[str] = None


class Orchestrator:
    """Coordinates the setup instruction pipeline and its sibling operations."""

    def __init__(
        self,
        resources: ResourceLoader | None = None,
        pricing_store: PricingModelStore | None = None,
        renderer: DocumentRenderer | None = None,
        *,
        env_keys: Sequence[str] = DEFAULT_ENV_KEYS,
    ) -> None:
        self.resources = resources or ResourceLoader()
        self.pricing_store = pricing_store or HttpPricingModelStore()
        self.renderer = renderer or DocumentRenderer()
        self.env_keys = tuple(env_keys)
        self.logger = get_logger("orchestrator")

    @classmethod
    def from_config(cls, config: SetupGenConfig) -> "Orchestrator":
        """Build an orchestrator wired according to ``config``."""
        resources = ResourceLoader(
            config.resources.directory,
            template_name=config.resources.template or TEMPLATE_FILENAME,
            snippets_name=config.resources.snippets or SNIPPETS_FILENAME,
            analysis_prompt_name=config.resources.analysis_prompt or ANALYSIS_PROMPT_FILENAME,
        )
        store: PricingModelStore
        if config.pricing.source == "file" and config.pricing.file is not None:
            store = FilePricingModelStore(config.pricing.file)
        elif config.pricing.source == "none":
            store = StaticPricingModelStore(None)
        else:
            store = HttpPricingModelStore(
                config.pricing.base_url,
                request_timeout=config.pricing.request_timeout or 30.0,
            )
        return cls(
            resources=resources,
            pricing_store=store,
            renderer=DocumentRenderer(config.resources.templates_dir),
            env_keys=config.auth.env_keys,
        )

    def echo(self, message: str) -> str:
        return message

    def analyze_codebase(
        self, file_contents: Iterable[FileInput] | None, project_root: str | None = None
    ) -> str:
        """Bundle the analysis prompt with the supplied files for the calling agent."""
        if file_contents is None:
            raise InvalidInputError("fileContents is required and must be an array")
        provided = list(file_contents)
        files = _valid_files(provided)
        if not files:
            received = (
                "Empty array"
                if not provided
                else f"{len(provided)} file(s) provided, but none had valid path and content"
            )
            raise InvalidInputError(f"No valid files provided for analysis ({received})")

        self.logger.info("Preparing analysis request for %d file(s)", len(files))
        prompt = self.resources.load_analysis_prompt()
        return self.renderer.render(
            "analysis_request.md.j2",
            analysis_prompt=prompt,
            project_root=project_root,
            files=files,
        )

    def get_default_pricing_model(
        self, *, api_key: str | None = None, upstream_token: str | None = None
    ) -> str:
        """Return the caller's default pricing model as JSON text."""
        resolved_key = require_api_key(api_key, upstream_token, env_keys=self.env_keys)
        config = self.pricing_store.fetch_default(resolved_key)
        payload = config.to_dict() if config is not None else {}
        return f"Default pricing model: {json.dumps(payload)}"

    def get_setup_instructions(
        self,
        request: SetupInstructionsRequest,
        *,
        api_key: str | None = None,
        upstream_token: str | None = None,
    ) -> str:
        """Generate the tailored integration guide, or ask for an analysis first."""
        resolved_key = require_api_key(api_key, upstream_token, env_keys=self.env_keys)

        if request.file_contents and not request.codebase_analysis:
            self.logger.info("File contents supplied without an analysis; requesting one first")
            try:
                analysis_request = self.analyze_codebase(request.file_contents)
            except InvalidInputError as exc:
                self.logger.warning("Analysis request could not be prepared: %s", exc)
                analysis_request = str(exc)
            return self.renderer.render(
                "analysis_required.md.j2",
                pricing_components_json=json.dumps(list(request.pricing_components)),
                analysis_request=analysis_request,
            ).rstrip() + "\n"

        codebase_info = extract_codebase_info(request.codebase_analysis)
        project_structure = first_present(
            request.project_structure,
            codebase_info.project_structure,
            DEFAULT_PROJECT_STRUCTURE,
        )
        stack_details = first_present(
            request.stack_details, codebase_info.stack_details, DEFAULT_STACK_DETAILS
        )
        additional_details = (
            first_present(request.additional_details, codebase_info.additional_details) or ""
        )
        self.logger.debug(
            "Resolved project_structure=%s framework=%s", project_structure, codebase_info.framework
        )

        pricing = self._prepare_pricing_model(resolved_key)

        template = self.resources.load_template()
        snippets = self.resources.load_snippets()

        replacements = build_template_replacements(
            ReplacementContext(
                codebase_info=codebase_info,
                snippets=snippets,
                project_structure=project_structure,
                stack_details=stack_details,
                additional_details=additional_details,
                codebase_analysis=request.codebase_analysis,
                pricing_model=pricing.config,
            )
        )
        instructions = apply_template_replacements(template, replacements)

        pricing_instructions = ""
        if pricing.config is not None and pricing.analysis is not None:
            framework = snippets.framework(framework_key(project_structure))
            pricing_instructions = compose_pricing_instructions(
                pricing.config,
                pricing.analysis,
                client_package=framework.billing_hook_pkg if framework else DEFAULT_CLIENT_PACKAGE,
                server_package=framework.server_pkg if framework else DEFAULT_SERVER_PACKAGE,
                renderer=self.renderer,
            )

        document = self.renderer.render(
            "setup_instructions.md.j2",
            codebase_analysis=request.codebase_analysis,
            instructions=instructions,
            pricing_yaml=pricing.yaml,
            pricing_status=pricing.status,
            pricing_instructions=pricing_instructions,
        )
        self.logger.info("Generated setup instructions (%d characters)", len(document))
        return document.rstrip() + "\n"

    def _prepare_pricing_model(self, api_key: str) -> PricingModelOutcome:
        try:
            config = self.pricing_store.fetch_default(api_key)
        except Exception as exc:
            self.logger.warning("Failed to fetch pricing model: %s", exc)
            config = None

        if config is None:
            self.logger.info("No default pricing model found")
            return PricingModelOutcome(status=NO_PRICING_MODEL_MESSAGE)

        analysis = analyze_pricing_model(config)
        try:
            pricing_yaml = serialize_pricing_model(config)
        except PricingSerializationError as exc:
            self.logger.error("Failed to serialize pricing model to YAML: %s", exc)
            return PricingModelOutcome(
                config=config,
                analysis=analysis,
                status=PRICING_SERIALIZATION_FAILED_MESSAGE,
            )

        self.logger.debug(
            "Pricing model has %d products, %d features, %d usage meters",
            len(config.products),
            len(config.features),
            len(config.usage_meters),
        )
        return PricingModelOutcome(config=config, yaml=pricing_yaml, analysis=analysis)


def _valid_files(entries: Iterable[FileInput]) -> List[FileContent]:
    files: List[FileContent] = []
    for entry in entries:
        if isinstance(entry, FileContent):
            path, content = entry.path, entry.content
        elif isinstance(entry, Mapping):
            path, content = entry.get("path"), entry.get("content")
        else:
            continue
        if path and content is not None:
            files.append(FileContent(path=str(path), content=str(content)))
    return files


def load_orchestrator(config_path: Path | None = None) -> Orchestrator:
    """Create an orchestrator from ``.setupgen.yml`` under ``config_path`` (cwd by default)."""
    return Orchestrator.from_config(load_config(config_path or Path.cwd()))


__all__ = [
    "Orchestrator",
    "PricingModelOutcome",
    "SetupInstructionsRequest",
    "load_orchestrator",
]
