from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Import core components
from app.core.logging_config import setup_logging
from app.core.settings import settings
from app.middleware.logging import CORRELATION_HEADER, LoggingMiddleware

# Import models so every table is registered on Base.metadata
from app import models  # noqa: F401
from app.db import Base, engine

# Import route modules
from app.routes import health, resources, profile, notes, assignments, application
from app.exceptions import (
    UnauthorizedException, ForbiddenException,
    NotFoundException, ValidationException
)

# Set up logging first
logger = setup_logging()

_docs_enabled = settings.is_development or settings.show_docs


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("=" * 50)
    logger.info("Mentorship Program API starting up")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"CORS origins: {settings.cors_origins}")
    logger.info(f"Auth0: {'configured for ' + settings.auth0_domain if settings.auth0_configured else 'not configured'}")
    logger.info(f"Mock tokens: {'accepted' if settings.allow_mock_tokens else 'rejected'}")
    logger.info(f"Matching service: {settings.ds_api_url or 'not configured'}")
    logger.info("=" * 50)

    if settings.auto_create_tables:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured (AUTO_CREATE_TABLES)")

    yield
    logger.info("Mentorship Program API shutting down")

app = FastAPI(
    title="Mentorship Program API",
    description="Resources, profiles, notes and mentor assignments for a mentorship program",
    version="1.0.0",
    docs_url="/docs" if _docs_enabled else None,
    redoc_url="/redoc" if _docs_enabled else None,
    lifespan=lifespan,
)

# Add middleware in correct order (last added = first executed)
app.add_middleware(LoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_origins != ["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(resources.router)
app.include_router(profile.router)
app.include_router(notes.router)
app.include_router(assignments.router)
app.include_router(application.router)


def _error_response(request: Request, status_code: int, message: str, headers=None, **extra) -> JSONResponse:
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    content = {"status": status_code, "message": message, "correlation_id": correlation_id}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


# Exception handlers
@app.exception_handler(UnauthorizedException)
async def unauthorized_exception_handler(request: Request, exc: UnauthorizedException):
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    logger.warning(f"[{correlation_id}] Unauthorized access attempt on {request.url.path}: {exc.detail}")
    return _error_response(request, 401, exc.detail, headers=exc.headers)


@app.exception_handler(ForbiddenException)
async def forbidden_exception_handler(request: Request, exc: ForbiddenException):
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    logger.warning(f"[{correlation_id}] Forbidden access attempt on {request.url.path}: {exc.detail}")
    return _error_response(request, 403, exc.detail)


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    logger.warning(f"[{correlation_id}] Validation error on {request.url.path}: {exc.detail}")
    return _error_response(request, 400, exc.detail)


@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    logger.warning(f"[{correlation_id}] Not found error on {request.url.path}: {exc.detail}")
    return _error_response(request, 404, exc.detail)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Report only the first violated constraint
    errors = exc.errors()
    message = "Missing or invalid request"
    if errors:
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query"))
        message = f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    logger.warning(f"[{correlation_id}] Invalid request on {request.url.path}: {message}")
    return _error_response(request, 400, message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(request, exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    logger.error(f"[{correlation_id}] Unhandled exception on {request.url.path}: {str(exc)}", exc_info=True)

    # Rendered outside LoggingMiddleware, so the correlation header is set here
    headers = {CORRELATION_HEADER: correlation_id}
    if settings.is_development:
        return _error_response(request, 500, "Internal server error", headers=headers, error=str(exc), type=type(exc).__name__)
    return _error_response(request, 500, "Internal server error", headers=headers)


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Mentorship Program API",
        "version": "1.0.0",
        "environment": settings.environment,
        "docs_url": "/docs" if _docs_enabled else None,
        "health_check": "/health",
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level="info" if settings.is_development else "warning"
    )
