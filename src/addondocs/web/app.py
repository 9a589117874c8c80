"""FastAPI application exposing documentation queries over HTTP."""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from addondocs import __version__
from addondocs.config import AppConfig
from addondocs.router import InvalidModeError, QueryRouter

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="addondocs", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_router: QueryRouter | None = None


class QueryContext(BaseModel):
    current_file: str | None = None
    project_type: str | None = None
    current_selection_in_editor: str | None = None


class QueryPayload(BaseModel):
    query_text: str
    target_source: (
        Literal["express_sdk", "spectrum_web_components", "sdk", "component-library", "all"] | None
    ) = None
    context: QueryContext | None = None
    response_type_preferences: list[str] = Field(default_factory=list)


class ModePayload(BaseModel):
    mode: Literal["remote", "local", "github"]


def get_router() -> QueryRouter:
    global _router
    if _router is None:
        _router = QueryRouter(AppConfig.from_env())
    return _router


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    if _router is not None:
        await _router.aclose()


@app.post("/query")
async def query_documentation(
    payload: QueryPayload, router: QueryRouter = Depends(get_router)
) -> dict[str, Any]:
    query = payload.query_text.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Query text cannot be empty")

    response = await router.route(query, payload.target_source)
    return {
        "query_text": response.query_text,
        "results": [item.to_dict() for item in response.results],
        "confidence_score": response.confidence_score,
        "mode_used": response.mode_used,
        "summary": response.summary,
    }


@app.post("/mode")
async def set_knowledge_source(
    payload: ModePayload, router: QueryRouter = Depends(get_router)
) -> dict[str, str]:
    try:
        return router.set_mode(payload.mode)
    except InvalidModeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/capabilities")
async def get_capabilities(router: QueryRouter = Depends(get_router)) -> dict[str, Any]:
    return router.capabilities()


@app.get("/code-samples/{feature}")
async def get_code_sample(
    feature: str,
    language: str | None = None,
    router: QueryRouter = Depends(get_router),
) -> dict[str, Any]:
    sample = await router.code_sample(feature, language)
    if sample is None:
        raise HTTPException(status_code=404, detail=f"No code sample available for '{feature}'")
    return {
        "feature": sample.feature,
        "code": sample.code,
        "language": sample.language,
        "framework": sample.framework,
        "file_path": sample.file_path,
        "source_hint": sample.source_hint,
    }
