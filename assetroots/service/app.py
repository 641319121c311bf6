"""FastAPI application entrypoint for assetroots service mode."""

from __future__ import annotations

from typing import Any, Callable, Dict, List

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import DEFAULT_OUTPUT_ROOT
from ..errors import AssetResolutionError, ManifestError
from ..manifest import parse_manifest
from ..resolver import AssetResolver


class ResolveRequest(BaseModel):
    manifest: Dict[str, Any] = Field(default_factory=dict)
    output_root: str = DEFAULT_OUTPUT_ROOT


class AssetEntry(BaseModel):
    exec_path: str
    owner: str
    root: str
    bundle_path: str


class ResolveResponse(BaseModel):
    assets: List[AssetEntry]


class CheckResponse(BaseModel):
    status: str
    count: int


class HealthResponse(BaseModel):
    status: str


def _default_resolver() -> AssetResolver:
    return AssetResolver()


def create_app(
    resolver_factory: Callable[[], AssetResolver] = _default_resolver,
) -> FastAPI:
    """Create the FastAPI application exposing asset resolution."""

    app = FastAPI(title="assetroots", version="1.0.0")

    async def get_resolver() -> AssetResolver:
        return resolver_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/resolve", response_model=ResolveResponse)
    async def resolve(
        payload: ResolveRequest,
        resolver: AssetResolver = Depends(get_resolver),
    ) -> ResolveResponse:
        manifest = parse_manifest(payload.manifest, output_root=payload.output_root)
        collection = manifest.resolve(resolver)
        return ResolveResponse.model_validate(collection.to_dict())

    @app.post("/check", response_model=CheckResponse)
    async def check(
        payload: ResolveRequest,
        resolver: AssetResolver = Depends(get_resolver),
    ) -> CheckResponse:
        manifest = parse_manifest(payload.manifest, output_root=payload.output_root)
        collection = manifest.resolve(resolver)
        return CheckResponse(status="ok", count=len(collection))

    @app.exception_handler(ManifestError)
    async def manifest_error_handler(_: Any, exc: ManifestError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(AssetResolutionError)
    async def resolution_error_handler(_: Any, exc: AssetResolutionError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "kind": type(exc).__name__},
        )

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
