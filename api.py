"""
Academy FastAPI Application

Main entry point for the trading academy backend: public site content,
the lead quiz, the 5-day challenge and the guarded learner area.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Common library imports
from common.database import (
    BackendError,
    BackendUnavailableError,
    RecordNotFoundError,
    RestClient,
    set_backend_client,
)
from common.utils import error_response, success_response

# App-specific imports
from academy.config import settings

# Import routers
from academy.routers import (
    site_router,
    quiz_router,
    funnel_router,
    challenge_router,
    auth_router,
    profile_router,
    learning_router,
    members_router,
    pages_router,
)

# Import service initialization
from academy.dependencies import build_auth_provider, init_all_services

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Backend Client
# =============================================================================
backend = RestClient()


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Connects the backend client and initializes services on startup,
    closes the client on shutdown.
    """
    logger.info("Starting Academy API...")

    if settings.is_production():
        settings.validate_required()

    # Service-role key bypasses row-level security for server-side reads
    api_key = settings.SUPABASE_SERVICE_ROLE_KEY or settings.SUPABASE_ANON_KEY or ""
    await backend.connect(
        url=settings.SUPABASE_URL,
        api_key=api_key,
        timeout=settings.BACKEND_TIMEOUT_SECONDS,
    )
    set_backend_client(backend)

    init_all_services(
        client=backend,
        provider=build_auth_provider(settings),
        settings=settings,
    )
    logger.info("Academy API started")

    yield

    logger.info("Shutting down Academy API...")
    await backend.disconnect()


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title="Academy API",
    description="Trading academy site, lead quiz and learner backend",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Backend Error Handlers
# =============================================================================
@app.exception_handler(BackendUnavailableError)
async def backend_unavailable_handler(request: Request, exc: BackendUnavailableError):
    logger.error(f"Backend unavailable on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=503,
        content=error_response("Service temporarily unavailable", code=exc.code),
        headers={"Retry-After": "5"},
    )


@app.exception_handler(RecordNotFoundError)
async def record_not_found_handler(request: Request, exc: RecordNotFoundError):
    return JSONResponse(
        status_code=404,
        content=error_response("Not found", code="NOT_FOUND"),
    )


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    logger.error(f"Backend rejected request on {request.url.path}: {exc.code} {exc.message}")
    status_code = exc.status_code if 400 <= exc.status_code < 500 else 502
    return JSONResponse(
        status_code=status_code,
        content=error_response(exc.message, code=exc.code or "BACKEND_ERROR", details=exc.details),
    )


# =============================================================================
# Include Routers (API under /api, pages under /academy)
# =============================================================================
API_PREFIX = "/api"

app.include_router(site_router, prefix=API_PREFIX)
app.include_router(quiz_router, prefix=API_PREFIX)
app.include_router(funnel_router, prefix=API_PREFIX)
app.include_router(challenge_router, prefix=API_PREFIX)
app.include_router(auth_router, prefix=API_PREFIX, tags=["Authentication"])
app.include_router(profile_router, prefix=API_PREFIX)
app.include_router(learning_router, prefix=API_PREFIX)
app.include_router(members_router, prefix=API_PREFIX)
app.include_router(pages_router)


# =============================================================================
# Health Check Endpoint
# =============================================================================
@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and the backend connection.
    """
    return success_response({
        "status": "ok",
        "version": "1.0.0",
        "backend": backend.is_connected,
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
