"""FastAPI server for EventLens"""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eventlens.api.routes.health import router as health_router
from eventlens.api.routes.insights import router as insights_router
from eventlens.config import APP_VERSION
from eventlens.infrastructure.settings import is_development
from eventlens.insights.pipeline import close_pipeline
from eventlens.observability.logging import get_logger
from eventlens.observability.telemetry import counter, log_event

# Load environment variables from .env file
load_dotenv()

app = FastAPI(title="EventLens API", version=APP_VERSION)

logger = get_logger(__name__)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Validation error handler that does not echo submitted event text back.
    """
    logger.warning("Validation error on %s: %d errors", request.url.path, len(exc.errors()))
    counter("api.validation_errors")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Invalid request format. Please check your request and try again.",
            "error_count": len(exc.errors()),
            "invalid_fields": [str(err["loc"][-1]) for err in exc.errors()],
        },
    )


ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("EVENTLENS_ALLOWED_ORIGINS", "").split(",")
    if origin.strip()
]

# Allow the local dashboard in development only
if is_development():
    ALLOWED_ORIGINS.extend(
        [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)

app.include_router(health_router)
app.include_router(insights_router)

log_event("api.startup", service="eventlens", version=APP_VERSION)


@app.on_event("shutdown")
async def release_remote_clients() -> None:
    """Close pooled HTTP connections held by the shared insight pipeline."""
    close_pipeline()
    logger.info("Insight pipeline closed")


@app.get("/")
def root() -> dict[str, Any]:
    return {
        "service": "EventLens API",
        "version": APP_VERSION,
        "status": "running",
        "endpoints": {
            "health": "/health",
            "insights": "/api/insights",
        },
    }


def main() -> None:
    """Run the API with uvicorn (console script entry point)."""
    import uvicorn

    from eventlens.infrastructure.settings import API_HOST, API_PORT

    uvicorn.run("eventlens.api.app:app", host=API_HOST, port=API_PORT)
