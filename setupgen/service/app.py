"""FastAPI application exposing the setupgen tools over HTTP."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, Header
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..errors import (
    InvalidInputError,
    MissingCredentialError,
    PricingStoreError,
    ResourceError,
    UnknownToolError,
)
from ..logging import get_logger
from ..orchestrator import Orchestrator, load_orchestrator
from ..tools import TOOLS, invoke_tool

_LOGGER = get_logger("service")


class TextContent(BaseModel):
    type: str = "text"
    text: str


class ToolResponse(BaseModel):
    content: List[TextContent]


class ToolDescription(BaseModel):
    name: str
    description: str
    input_schema: Dict[str, Any]


class ToolListResponse(BaseModel):
    tools: List[ToolDescription]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return load_orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing setupgen tools."""

    app = FastAPI(title="SetupGen Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Lazy-instantiate per request to keep state predictable.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/tools", response_model=ToolListResponse)
    async def list_tools() -> ToolListResponse:
        return ToolListResponse(
            tools=[
                ToolDescription(
                    name=tool.name,
                    description=tool.description,
                    input_schema=tool.schema(),
                )
                for tool in TOOLS
            ]
        )

    @app.post("/tools/{name}", response_model=ToolResponse)
    async def call_tool(
        name: str,
        arguments: Optional[Dict[str, Any]] = Body(default=None),
        authorization: Optional[str] = Header(default=None),
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ToolResponse:
        def _run() -> str:
            return invoke_tool(orchestrator, name, arguments, upstream_token=authorization)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:  # pragma: no cover - fallback path when not in async context
            text = _run()
        else:
            text = await loop.run_in_executor(None, _run)
        return ToolResponse(content=[TextContent(text=text)])

    @app.exception_handler(MissingCredentialError)
    async def missing_credential_handler(_: Any, exc: MissingCredentialError) -> JSONResponse:
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.exception_handler(UnknownToolError)
    async def unknown_tool_handler(_: Any, exc: UnknownToolError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(_: Any, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ResourceError)
    async def resource_error_handler(_: Any, exc: ResourceError) -> JSONResponse:
        _LOGGER.error("Required resource unavailable: %s", exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(PricingStoreError)
    async def pricing_store_handler(_: Any, exc: PricingStoreError) -> JSONResponse:
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app()
    uvicorn.run(app, host=host, port=port)
