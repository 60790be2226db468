"""
Lesson Alchemist Backend API
FastAPI application for generating illustrated, narrated interactive academic modules

This is the main entry point that wires together all routes and services.
"""

import os
import uuid
from collections import defaultdict, deque
from contextlib import asynccontextmanager
from pathlib import Path
from time import monotonic

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
    list_pipeline_steps,
    get_model_name,
)
from .routes import generation_router, jobs_router, images_router
from .core import (
    setup_logging,
    get_logger,
    set_request_id,
    clear_context,
    parse_bool_env,
    env_int,
    gateway_backend_report,
)

# Initialize logging
log_level = os.getenv("LOG_LEVEL", "INFO")
log_file = os.getenv("LOG_FILE")
use_json_logs = parse_bool_env(os.getenv("JSON_LOGS"))

setup_logging(
    level=log_level,
    log_file=Path(log_file) if log_file else None,
    use_json=use_json_logs,
)

logger = get_logger(__name__, service="api")
logger.info("Starting Lesson Alchemist API", extra={
    "log_level": log_level,
    "json_logs": use_json_logs,
})

# Runtime protection controls (data URIs make request bodies large)
MAX_REQUEST_BODY_BYTES = env_int("MAX_REQUEST_BODY_BYTES", 20 * 1024 * 1024, 1024)
RATE_LIMIT_ENABLED = parse_bool_env(os.getenv("RATE_LIMIT_ENABLED"), default=True)
RATE_LIMIT_REQUESTS = env_int("RATE_LIMIT_REQUESTS_PER_MINUTE", 600, 1)
RATE_LIMIT_WINDOW_SECONDS = env_int("RATE_LIMIT_WINDOW_SECONDS", 60, 1)
RATE_LIMIT_EXEMPT_PATHS = {"/", "/health"}
_rate_limit_buckets: dict[str, deque[float]] = defaultdict(deque)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    backend = gateway_backend_report()
    _app.state.gateway_backend = backend
    if not backend["configured"]:
        logger.warning("Model gateway is not configured; generation requests will fail", extra=backend)
    else:
        logger.info("Model gateway configured", extra=backend)
    yield


# Create FastAPI app
app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
)


def _rate_limited(client_ip: str) -> bool:
    now = monotonic()
    bucket = _rate_limit_buckets[client_ip]
    window_start = now - RATE_LIMIT_WINDOW_SECONDS
    while bucket and bucket[0] < window_start:
        bucket.popleft()
    if len(bucket) >= RATE_LIMIT_REQUESTS:
        return True
    bucket.append(now)
    return False


@app.middleware("http")
async def add_request_correlation(request: Request, call_next):
    """Add correlation ID, enforce request limits, and attach security headers."""
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    set_request_id(request_id)
    path = request.url.path
    client_ip = request.client.host if request.client else "unknown"

    logger.info(f"{request.method} {path}", extra={
        "method": request.method,
        "path": path,
        "client": client_ip,
    })

    try:
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                size = int(content_length)
            except ValueError:
                return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length header"})
            if size > MAX_REQUEST_BODY_BYTES:
                return JSONResponse(
                    status_code=413,
                    content={"detail": f"Request body too large. Max allowed: {MAX_REQUEST_BODY_BYTES} bytes"},
                )

        if RATE_LIMIT_ENABLED and path not in RATE_LIMIT_EXEMPT_PATHS and _rate_limited(client_ip):
            return JSONResponse(status_code=429, content={"detail": "Rate limit exceeded. Please retry later."})

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("X-Frame-Options", "DENY")

        logger.info(f"Response: {response.status_code}", extra={
            "status_code": response.status_code,
            "method": request.method,
            "path": path,
        })

        return response
    finally:
        clear_context()


# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(generation_router)
app.include_router(jobs_router)
app.include_router(images_router)


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "message": "Lesson Alchemist API - Generate interactive academic modules",
        "version": API_VERSION,
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint for container orchestration.

    Reports the model gateway backend (Gemini API key or Vertex AI project)
    and the model used by each pipeline step. Returns 503 when the gateway
    has no credentials configured.
    """
    backend = gateway_backend_report()
    checks = {
        "status": "healthy" if backend["configured"] else "unhealthy",
        "checks": {
            "llm_backend": backend,
            "models": {step: get_model_name(step) for step in list_pipeline_steps()},
        },
    }
    if not backend["configured"]:
        logger.warning("Health check: model gateway credentials missing", extra=backend)
        return JSONResponse(status_code=503, content=checks)
    return checks


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
