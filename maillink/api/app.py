"""FastAPI server for maillink Gmail deep links"""

from __future__ import annotations

from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from maillink import config
from maillink.api.routes.health import router as health_router
from maillink.api.routes.links import router as links_router
from maillink.observability.logging import get_logger
from maillink.observability.telemetry import counter, log_event

# Load environment variables from .env file
load_dotenv()

app = FastAPI(title="maillink API", version=config.APP_VERSION)

logger = get_logger(__name__)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Return field names only; subjects and addresses from the body are not echoed back.
    """
    logger.warning("Validation error on %s: %d error(s)", request.url.path, len(exc.errors()))
    counter("api.validation_errors")

    return JSONResponse(
        status_code=422,
        content={
            "detail": "Invalid request format. Please check your request and try again.",
            "error_count": len(exc.errors()),
            "invalid_fields": [str(err["loc"][-1]) for err in exc.errors()],
        },
    )


# CORS - the dashboard and the webmail host only
ALLOWED_ORIGINS = [f"https://{config.WEBMAIL_HOST}"]

if config.is_development():
    ALLOWED_ORIGINS.extend(
        [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://localhost:8000",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
            "http://127.0.0.1:8000",
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
app.include_router(links_router)

log_event("api.startup", service="maillink", version=config.APP_VERSION)


@app.get("/")
def root() -> dict[str, Any]:
    return {
        "service": "maillink API",
        "version": config.APP_VERSION,
        "status": "running",
        "endpoints": {
            "health": "/health",
            "resolve": "/api/links/resolve",
            "search": "/api/links/search",
            "debug": "/api/links/debug",
        },
    }


def main() -> None:
    """Run the API with uvicorn (maillink-api console script)."""
    import uvicorn

    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    main()
