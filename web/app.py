"""
FastAPI application for the join site.

Serves the landing page, the business intake form, and the join API.
Production deployment configuration via environment variables.
"""

import logging
import os
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from core.intake import BUSINESS_CATEGORIES, BusinessType, MAX_KEYWORDS, MAX_ADDITIONAL_LOCATIONS
from core.intake.form import default_form_values
from web.join_routes import router as join_router


logger = logging.getLogger(__name__)

# =============================================================================
# Environment Configuration
# =============================================================================

# Production mode detection
IS_PRODUCTION = os.getenv("RAILWAY_ENVIRONMENT") is not None or os.getenv("PRODUCTION", "").lower() == "true"

# CORS configuration - only explicitly listed origins in production
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else []
if not ALLOWED_ORIGINS and not IS_PRODUCTION:
    # Development fallback only
    ALLOWED_ORIGINS = ["http://localhost:8000", "http://127.0.0.1:8000"]

# Debug mode - NEVER enabled in production
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true" and not IS_PRODUCTION

WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"

APP_VERSION = "0.1.0"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="BlackLight Join",
        description="Business intake form and submission API",
        version=APP_VERSION,
        # Production settings: disable docs/redoc for public deployment
        docs_url=None if IS_PRODUCTION else "/docs",
        redoc_url=None if IS_PRODUCTION else "/redoc",
        openapi_url=None if IS_PRODUCTION else "/openapi.json",
        debug=DEBUG_MODE,
    )

    # Healthchecks: no dependencies, no IO
    @app.get("/health", include_in_schema=False)
    def health():
        return {"status": "healthy"}

    @app.get("/api/health")
    async def api_health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": APP_VERSION,
            "environment": "production" if IS_PRODUCTION else "development",
        }

    if ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    app.include_router(join_router)

    templates = Jinja2Templates(directory=TEMPLATES_DIR)

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        """Render the landing page."""
        return templates.TemplateResponse(
            request,
            "index.html",
            {"title": "BlackLight - Coming Soon"},
        )

    @app.get("/join", response_class=HTMLResponse)
    async def join_page(request: Request):
        """Render the business intake form with its default values."""
        return templates.TemplateResponse(
            request,
            "join.html",
            {
                "title": "Join BlackLight",
                "categories": BUSINESS_CATEGORIES,
                "business_types": [bt.value for bt in BusinessType],
                "defaults": default_form_values(),
                "max_keywords": MAX_KEYWORDS,
                "max_locations": MAX_ADDITIONAL_LOCATIONS,
            },
        )

    logger.info("Join app created (production=%s)", IS_PRODUCTION)
    return app


# Create app instance for uvicorn
app = create_app()
