from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from config.settings import get_settings
from discovery.client import GeminiClient
from discovery.core.rate_limiter import RateLimiter
from discovery.errors import (
    DiscoveryError,
    InvalidRequest,
    QuotaExceeded,
    RateLimitExceeded,
)
from discovery.service import DiscoveryService


settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("aitools")

app = FastAPI(title="AI Tools Discovery API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

ENDPOINTS = {
    "POST /api/recommend": "Get AI tool recommendations based on natural language description",
    "GET /api/tools/[toolName]": "Get detailed information about a specific AI tool",
    "GET /api/category/[category]": "Discover tools in a specific category",
    "GET /api/insights": "Get AI industry insights and trends",
    "POST /api/search": "Search for AI tools with filters",
    "POST /api/compare": "Compare multiple AI tools",
    "GET /api/health": "Health check",
    "GET /api/endpoints": "This endpoint - list all available endpoints",
}


class RecommendRequest(BaseModel):
    userPrompt: Optional[str] = Field(None, description="Natural language description of the problem")


class SearchRequest(BaseModel):
    query: Optional[str] = Field(None, description="Free-text search query")
    filters: Optional[Dict[str, Any]] = Field(None, description="budget, category and techLevel filters")


class CompareRequest(BaseModel):
    # list check and minimum length are enforced by DiscoveryService.compare
    tools: Optional[Any] = Field(None, description="Two or more tool names")


@lru_cache(maxsize=1)
def get_service() -> DiscoveryService:
    current = get_settings()
    if not current.google_api_key:
        raise HTTPException(
            status_code=500,
            detail="Missing GEMINI_API_KEY in environment or .env",
        )
    logger.info(
        "Config: model=%s rate_limit=%s/%ss",
        current.gemini_model,
        current.rate_limit_max_requests,
        current.rate_limit_window_seconds,
    )
    limiter = RateLimiter(
        max_requests=current.rate_limit_max_requests,
        window_seconds=current.rate_limit_window_seconds,
    )
    return DiscoveryService(GeminiClient(current), limiter)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _failure(title: str, exc: DiscoveryError, suggestion: Optional[str] = None) -> JSONResponse:
    if isinstance(exc, InvalidRequest):
        logger.warning("Rejected request: %s", exc)
        body: Dict[str, Any] = {"error": exc.message}
    elif isinstance(exc, RateLimitExceeded):
        logger.warning("Local rate limit hit: %s", exc)
        body = {"error": "Too many requests", "details": exc.message}
    elif isinstance(exc, QuotaExceeded):
        logger.warning("Upstream quota exhausted (status=%s): %s", exc.status_code, exc)
        body = {
            "error": "AI service quota exceeded",
            "details": exc.message,
            "suggestion": exc.suggestion,
        }
    else:
        logger.error("%s [%s]: %s", title, exc.kind.value, exc)
        body = {"error": title, "details": exc.message}
        if suggestion:
            body["suggestion"] = suggestion
    return JSONResponse(status_code=exc.http_status, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_failed(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    logger.warning("Invalid request to %s: %s", request.url.path, details)
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


def _recommend(user_prompt: Optional[str], service: DiscoveryService):
    logger.info("Processing AI discovery request: %s", user_prompt)
    start = time.perf_counter()
    try:
        recommendations = service.recommend(user_prompt)
    except DiscoveryError as exc:
        return _failure(
            "Failed to discover AI tools",
            exc,
            suggestion="Try rephrasing your request or check if Gemini API key is valid",
        )
    processing_ms = int((time.perf_counter() - start) * 1000)
    return {
        "success": True,
        "query": user_prompt,
        **recommendations,
        "metadata": {
            "processingTimeMs": processing_ms,
            "timestamp": _timestamp(),
            "totalRecommendations": len(recommendations.get("recommendations") or []),
            "aiPowered": True,
        },
    }


@app.get("/api/recommend")
def recommend_get(userPrompt: Optional[str] = None, service: DiscoveryService = Depends(get_service)):
    return _recommend(userPrompt, service)


@app.post("/api/recommend")
def recommend_post(req: Optional[RecommendRequest] = None, service: DiscoveryService = Depends(get_service)):
    return _recommend(req.userPrompt if req else None, service)


def _search(query: Optional[str], filters: Optional[Dict[str, Any]], service: DiscoveryService):
    logger.info("Searching AI tools for: %s", query)
    try:
        results = service.search(query, filters)
    except DiscoveryError as exc:
        return _failure("Failed to search AI tools", exc)
    return {
        "success": True,
        "query": query,
        "filters": filters,
        **results,
        "timestamp": _timestamp(),
    }


@app.get("/api/search")
def search_get(
    query: Optional[str] = None,
    filters: Optional[str] = None,
    service: DiscoveryService = Depends(get_service),
):
    parsed_filters = None
    if filters:
        try:
            parsed_filters = json.loads(filters)
        except ValueError as exc:
            return JSONResponse(status_code=400, content={"error": "Invalid filters", "details": str(exc)})
        if parsed_filters is not None and not isinstance(parsed_filters, dict):
            return JSONResponse(
                status_code=400,
                content={"error": "Invalid filters", "details": "filters must be a JSON object"},
            )
    return _search(query, parsed_filters, service)


@app.post("/api/search")
def search_post(req: Optional[SearchRequest] = None, service: DiscoveryService = Depends(get_service)):
    req = req or SearchRequest()
    return _search(req.query, req.filters, service)


@app.get("/api/tools/{tool_name}")
def tool_details(tool_name: str, service: DiscoveryService = Depends(get_service)):
    logger.info("Getting detailed info for: %s", tool_name)
    try:
        tool_info = service.tool_details(tool_name)
    except DiscoveryError as exc:
        return _failure("Failed to get tool details", exc)
    return {"success": True, "tool": tool_info, "timestamp": _timestamp()}


@app.get("/api/category/{category}")
def category_tools(category: str, service: DiscoveryService = Depends(get_service)):
    logger.info("Discovering tools in category: %s", category)
    try:
        category_info = service.category_tools(category)
    except DiscoveryError as exc:
        return _failure("Failed to discover category tools", exc)
    return {"success": True, **category_info, "timestamp": _timestamp()}


@app.get("/api/insights")
def industry_insights(service: DiscoveryService = Depends(get_service)):
    logger.info("Getting AI industry insights")
    try:
        insights = service.industry_insights()
    except DiscoveryError as exc:
        return _failure("Failed to get industry insights", exc)
    return {"success": True, "insights": insights, "timestamp": _timestamp()}


@app.post("/api/compare")
def compare_tools(req: Optional[CompareRequest] = None, service: DiscoveryService = Depends(get_service)):
    try:
        comparison = service.compare(req.tools if req else None)
    except DiscoveryError as exc:
        return _failure("Failed to compare tools", exc)
    return {"success": True, **comparison, "timestamp": _timestamp()}


@app.get("/api/endpoints")
def endpoints() -> Dict[str, Any]:
    return {
        "success": True,
        "endpoints": ENDPOINTS,
        "description": "Complete AI Tools Discovery Platform API",
    }


@app.get("/api/health")
def health():
    return {"status": "ok", "timestamp": _timestamp()}
