"""Named operations exposed to agents, with their declared input schemas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidInputError, UnknownToolError
from .models import FileContent
from .orchestrator import Orchestrator, SetupInstructionsRequest
from .prompting.constants import PricingComponent


class ToolInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FileContentInput(ToolInput):
    path: str = Field(description="File path relative to project root")
    content: str = Field(description="File contents")


class EchoInput(ToolInput):
    message: str = Field(description="Text to echo back")


class AnalyzeCodebaseInput(ToolInput):
    file_contents: List[FileContentInput] = Field(
        alias="fileContents",
        min_length=1,
        description=(
            "Array of file contents to analyze. Include key files like package.json, auth "
            "config files, route files, middleware, API routes, etc."
        ),
    )
    project_root: Optional[str] = Field(
        default=None,
        alias="projectRoot",
        description="Project root path (optional, for context)",
    )


class SetupInstructionsInput(ToolInput):
    file_contents: Optional[List[FileContentInput]] = Field(
        default=None,
        alias="fileContents",
        description=(
            "Optional: file contents to auto-detect project structure. When provided without "
            "codebaseAnalysis the tool asks for an analysis first."
        ),
    )
    codebase_analysis: Optional[str] = Field(
        default=None,
        alias="codebaseAnalysis",
        description="Optional: the markdown document produced by following analyzeCodebase.",
    )
    project_structure: Optional[Literal["nextjs", "react"]] = Field(
        default=None,
        alias="projectStructure",
        description="Optional: nextjs or react. Extracted from codebaseAnalysis when omitted.",
    )
    pricing_components: List[PricingComponent] = Field(
        default_factory=list,
        alias="pricingComponents",
        description="Aspects of the pricing model to consider when setting up billing.",
    )
    stack_details: Optional[str] = Field(
        default=None,
        alias="stackDetails",
        description="Optional: stack details. Extracted from codebaseAnalysis when omitted.",
    )
    additional_details: Optional[str] = Field(
        default=None,
        alias="additionalDetails",
        description=(
            "Additional details such as the tenant / customer model. Extracted from "
            "codebaseAnalysis when omitted."
        ),
    )


class DefaultPricingModelInput(ToolInput):
    pass


Handler = Callable[[Orchestrator, Any, Optional[str]], str]


@dataclass(frozen=True)
class Tool:
    """A callable operation with a name, description and input schema."""

    name: str
    description: str
    input_model: Type[ToolInput]
    handler: Handler

    def schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)


def _echo(orchestrator: Orchestrator, payload: EchoInput, _: Optional[str]) -> str:
    return orchestrator.echo(payload.message)


def _analyze(orchestrator: Orchestrator, payload: AnalyzeCodebaseInput, _: Optional[str]) -> str:
    return orchestrator.analyze_codebase(
        [_file(item) for item in payload.file_contents],
        project_root=payload.project_root,
    )


def _setup_instructions(
    orchestrator: Orchestrator, payload: SetupInstructionsInput, token: Optional[str]
) -> str:
    request = SetupInstructionsRequest(
        pricing_components=list(payload.pricing_components),
        file_contents=[_file(item) for item in payload.file_contents or []] or None,
        codebase_analysis=payload.codebase_analysis,
        project_structure=payload.project_structure,
        stack_details=payload.stack_details,
        additional_details=payload.additional_details,
    )
    return orchestrator.get_setup_instructions(request, upstream_token=token)


def _default_pricing_model(
    orchestrator: Orchestrator, _: DefaultPricingModelInput, token: Optional[str]
) -> str:
    return orchestrator.get_default_pricing_model(upstream_token=token)


def _file(item: FileContentInput) -> FileContent:
    return FileContent(path=item.path, content=item.content)


TOOLS: tuple[Tool, ...] = (
    Tool(
        name="echo",
        description="Echo a message back to the caller.",
        input_model=EchoInput,
        handler=_echo,
    ),
    Tool(
        name="getSetupInstructions",
        description=(
            "Get instructions for a project to integrate billing and payments. Can auto-detect "
            "project structure from a codebase analysis, or use the manual projectStructure "
            "parameter."
        ),
        input_model=SetupInstructionsInput,
        handler=_setup_instructions,
    ),
    Tool(
        name="getDefaultPricingModel",
        description="Get the default pricing model for the organization.",
        input_model=DefaultPricingModelInput,
        handler=_default_pricing_model,
    ),
    Tool(
        name="analyzeCodebase",
        description=(
            "Returns an analysis prompt bundled with the supplied files. The calling assistant "
            "follows the prompt to write a markdown document describing the application "
            "structure, authentication and patterns."
        ),
        input_model=AnalyzeCodebaseInput,
        handler=_analyze,
    ),
)

_TOOLS_BY_NAME: Dict[str, Tool] = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> Tool:
    try:
        return _TOOLS_BY_NAME[name]
    except KeyError as exc:
        raise UnknownToolError(f"Unknown tool '{name}'") from exc


def tool_capabilities() -> Dict[str, Dict[str, str]]:
    """Return ``name -> {"description": ...}`` for every registered tool."""
    return {tool.name: {"description": tool.description} for tool in TOOLS}


def invoke_tool(
    orchestrator: Orchestrator,
    name: str,
    arguments: Mapping[str, Any] | None = None,
    *,
    upstream_token: str | None = None,
) -> str:
    """Validate ``arguments`` against the tool schema and run it."""
    tool = get_tool(name)
    try:
        payload = tool.input_model.model_validate(dict(arguments or {}))
    except ValidationError as exc:
        raise InvalidInputError(f"Invalid arguments for {name}: {exc}") from exc
    return tool.handler(orchestrator, payload, upstream_token)


__all__ = [
    "AnalyzeCodebaseInput",
    "DefaultPricingModelInput",
    "EchoInput",
    "FileContentInput",
    "SetupInstructionsInput",
    "TOOLS",
    "Tool",
    "get_tool",
    "invoke_tool",
    "tool_capabilities",
]
