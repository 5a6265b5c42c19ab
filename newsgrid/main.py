"""
FastAPI Application Entry Point.

Путь: newsgrid/main.py
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from newsgrid import __version__
from newsgrid.api.routes import account, admin, articles, verification
from newsgrid.infrastructure.config.settings import get_settings
from newsgrid.shared.exceptions.domain_exceptions import (
    AuthenticationRequired,
    BusinessRuleViolation,
    DomainException,
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    PermissionDenied,
)
from newsgrid.shared.exceptions.infrastructure_exceptions import (
    AuthProviderError,
    InfrastructureException,
)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

settings = get_settings()

logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="NewsGrid API",
    description="Платформа новостей с AI проверкой достоверности",
    version=__version__,
    debug=settings.debug
)

# CORS: с "*" куки и Authorization не разрешаются
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(articles.router, prefix="/api/v1")
app.include_router(account.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")
app.include_router(verification.router, prefix="/api/v1")


# =============================================================================
# Exception handlers
# =============================================================================

DOMAIN_STATUS = (
    (EntityNotFoundError, 404),
    (DuplicateEntityError, 409),
    (AuthenticationRequired, 401),
    (PermissionDenied, 403),
    (DomainValidationError, 400),
    (BusinessRuleViolation, 400),
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Невалидный запрос: 400 вместо 422 по умолчанию."""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        messages.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    logger.warning(f"{request.method} {request.url.path}: invalid request: {messages}")
    return _error(400, "; ".join(messages) or "Invalid request")


@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException):
    for exc_type, status_code in DOMAIN_STATUS:
        if isinstance(exc, exc_type):
            return _error(status_code, str(exc))
    return _error(400, str(exc))


@app.exception_handler(InfrastructureException)
async def infrastructure_exception_handler(request: Request, exc: InfrastructureException):
    if isinstance(exc, AuthProviderError):
        logger.warning(f"{request.method} {request.url.path}: {exc}")
        return _error(401, "Unauthorized")
    logger.error(f"{request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    return _error(500, str(exc) or "Internal server error")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "NewsGrid API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }
