"""FastAPI service for AI content generation.

Endpoints:
- GET /
- GET /health
- GET /content-types
- GET /tones
- POST /generate        { "contentType": "...", "topic": "...", "tone": "...", "customPrompt": "..." }
- POST /generate-batch  { "requests": [ ... up to 5 generate bodies ... ] }
"""
from __future__ import annotations
import os
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ai_content_generator.client.gemini import DEFAULT_BASE_URL, DEFAULT_MODEL, GeminiClient
from ai_content_generator.client.retry import RetryPolicy
from ai_content_generator.common.errors import ContentGeneratorError
from ai_content_generator.common.logging_setup import setup_logging
from ai_content_generator.common.pipeline import generate_batch, generate_content
from ai_content_generator.common.schema import BatchGenerateIn, BatchGenerateOut, GenerateIn, GenerateOut
from ai_content_generator.common.templates import load_catalog

LOGGER = logging.getLogger("contentgen.app")
setup_logging(os.getenv("LOG_LEVEL", "INFO"))

API_KEY = os.getenv("API_KEY")
GEMINI_BASE_URL = os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL)
MODEL_ID = os.getenv("GEMINI_MODEL", DEFAULT_MODEL)

TEMPERATURE = float(os.getenv("TEMPERATURE", "0.9"))
MAX_OUTPUT_TOKENS = int(os.getenv("MAX_OUTPUT_TOKENS", "2048"))
RETRY_MAX_ATTEMPTS = int(os.getenv("RETRY_MAX_ATTEMPTS", "3"))
RETRY_DELAY_MS = int(os.getenv("RETRY_DELAY_MS", "3000"))
HTTP_TIMEOUT_S = float(os.getenv("HTTP_TIMEOUT_S", "60"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

CATALOG = load_catalog(os.getenv("CONTENT_TYPES_PATH") or None)
CLIENT = GeminiClient(
    api_key=API_KEY,
    model=MODEL_ID,
    base_url=GEMINI_BASE_URL,
    temperature=TEMPERATURE,
    default_max_tokens=MAX_OUTPUT_TOKENS,
    retry=RetryPolicy(max_attempts=RETRY_MAX_ATTEMPTS, delay_s=RETRY_DELAY_MS / 1000),
    timeout=HTTP_TIMEOUT_S,
)

app = FastAPI(title="AI Content Generator API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(ContentGeneratorError)
async def _content_error_handler(request: Request, exc: ContentGeneratorError) -> JSONResponse:
    LOGGER.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    LOGGER.warning("Invalid request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Server error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": f"Server error: {exc}"})


@app.on_event("startup")
def _log_configuration() -> None:
    """Warn early when the service cannot generate anything."""
    if not CLIENT.api_key:
        LOGGER.warning("API_KEY is not set; /generate will answer 500")
    LOGGER.info(
        "Loaded %s content types and %s tones; model=%s max_tokens=%s",
        len(CATALOG.content_types),
        len(CATALOG.tones),
        CLIENT.model,
        CLIENT.default_max_tokens,
    )


@app.get("/")
def index() -> dict[str, Any]:
    return {
        "service": "AI Content Generator API",
        "status": "running",
        "version": "unified",
        "available_types": list(CATALOG.content_types),
        "available_tones": list(CATALOG.tones),
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "model": CLIENT.model}


@app.get("/content-types")
def content_types() -> dict[str, list[dict[str, Any]]]:
    types = []
    for ct in CATALOG.content_types.values():
        entry: dict[str, Any] = {"id": ct.id, "name": ct.name}
        if ct.max_length is not None:
            entry["maxLength"] = ct.max_length
        types.append(entry)
    return {"types": types}


@app.get("/tones")
def tones() -> dict[str, list[dict[str, str]]]:
    return {"tones": [{"id": k, "description": v} for k, v in CATALOG.tones.items()]}


@app.post("/generate", response_model=GenerateOut)
async def generate(body: GenerateIn) -> GenerateOut:
    return await generate_content(CLIENT, CATALOG, body)


@app.post("/generate-batch", response_model=BatchGenerateOut, response_model_exclude_none=True)
async def generate_many(body: BatchGenerateIn) -> BatchGenerateOut:
    return await generate_batch(CLIENT, CATALOG, body.requests)
