# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Barcode Label API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import (
    HttpError,
    LabelApiException,
    MethodNotAllowedError,
    label_api_exception_handler,
    validation_exception_handler,
)
from app.routers import barcode, health
from lib.fonts import register_fonts

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Register label fonts (once per process)
    - Shutdown: Nothing to release; fonts stay registered
    """
    logger.info(f"Starting Barcode Label API in {settings.ENVIRONMENT} mode")
    logger.info(f"Default hashing format: {settings.DEFAULT_HASHING_FORMAT.value}")

    # Fails startup if a font file is missing
    register_fonts(settings.FONT_REGULAR_PATH, settings.FONT_BOLD_PATH)

    yield

    logger.info("Shutting down Barcode Label API")


# Create FastAPI application
app = FastAPI(
    title="Barcode Label API",
    description="""
## Price Label Generator

Renders a Code128 barcode for a product code and prints the sales and
purchase prices underneath in an obfuscated form.

### Hashing Formats

| Format | `75.50` becomes |
|--------|-----------------|
| `base64` | `NzUuNTA=` |
| `mask` | `75***50` |
| `replace` | `7@.@#` |
| `letter_substitution` | `SFZFT` |

### Quick Start

```bash
curl -X POST http://localhost:8000/api/generate-barcode \\
  -H "Content-Type: application/json" \\
  -d '{"productCode": "ABC123", "salesPrice": 100, "purchasePrice": "75.50", "hashingFormat": "mask"}' \\
  -o barcode-ABC123.png
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Barcode",
            "description": "Generate barcode price labels",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(LabelApiException)
async def handle_label_api_exception(request: Request, exc: LabelApiException):
    """Handle custom Label API exceptions."""
    return await label_api_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    """Render routing errors (404, 405) in the structured error format."""
    if exc.status_code == 405:
        allow = (exc.headers or {}).get("Allow", "POST")
        allowed = [method.strip() for method in allow.split(",") if method.strip()]
        error = MethodNotAllowedError(request.method, allowed)
    else:
        error = HttpError(exc.status_code, str(exc.detail), headers=exc.headers)
    return await label_api_exception_handler(request, error)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Label endpoint, at the legacy path and the versioned path
app.include_router(
    barcode.router,
    prefix="/api",
    tags=["Barcode"]
)

app.include_router(
    barcode.router,
    prefix="/api/v1",
    tags=["Barcode"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Barcode Label API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
