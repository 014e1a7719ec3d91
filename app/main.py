from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

from app.api.analyze import router as analyze_router
from app.api.health import router as health_router
from core.errors import ConfigurationError
from core.logging import setup_json_logging

# Setup logging
setup_json_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="TikTok Analytics API", version="0.1.0")


@app.exception_handler(ConfigurationError)
def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    """Configuration problems raised while building dependencies"""
    logger.error(f"Configuration error: {exc.message}")
    return JSONResponse(
        status_code=500,
        content={"error": "Server configuration error", "details": exc.message}
    )


@app.exception_handler(RequestValidationError)
def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies get the same 400 shape as a rejected URL"""
    errors = exc.errors()
    logger.warning(f"Request validation failed: {len(errors)} error(s)")
    if any("url" in error.get("loc", ()) for error in errors):
        message = "Invalid TikTok URL"
    else:
        message = "Invalid request body"
    return JSONResponse(status_code=400, content={"error": message})


# Include routers
app.include_router(health_router)  # Health at root level
app.include_router(analyze_router, prefix="/api")
