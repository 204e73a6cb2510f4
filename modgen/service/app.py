"""FastAPI application entrypoint for modgen service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from ..errors import FetchError, ParseError, TemplateError
from ..generator import StubGenerator
from ..models import ModuleDescriptor
from ..stubs.formatter import StubFormatter, StubPolicy


class StubsRequest(BaseModel):
    module_name: str
    namespace: str
    resource_type: str
    resource_subtype: str
    model_name: str
    sdk_version: str
    policy: Optional[StubPolicy] = None


class HealthResponse(BaseModel):
    status: str


def _default_generator() -> StubGenerator:
    return StubGenerator()


def create_app(
    generator_factory: Callable[[], StubGenerator] = _default_generator,
) -> FastAPI:
    """Create the FastAPI application exposing stub generation."""

    app = FastAPI(title="modgen Service", version="1.0.0")

    async def get_generator() -> StubGenerator:
        return generator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/stubs", response_class=PlainTextResponse)
    async def generate(
        payload: StubsRequest,
        generator: StubGenerator = Depends(get_generator),
    ) -> PlainTextResponse:
        module = ModuleDescriptor(
            module_name=payload.module_name,
            namespace=payload.namespace,
            resource_type=payload.resource_type,
            resource_subtype=payload.resource_subtype,
            model_name=payload.model_name,
            sdk_version=payload.sdk_version,
        )
        formatter = StubFormatter(payload.policy) if payload.policy is not None else None

        def _run_generate() -> bytes:
            return generator.generate(module, formatter=formatter)

        loop = asyncio.get_running_loop()
        output = await loop.run_in_executor(None, _run_generate)
        return PlainTextResponse(output.decode("utf-8"), media_type="text/x-go")

    @app.exception_handler(FetchError)
    async def fetch_error_handler(_: Any, exc: FetchError) -> JSONResponse:
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(ParseError)
    async def parse_error_handler(_: Any, exc: ParseError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(TemplateError)
    async def template_error_handler(_: Any, exc: TemplateError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
