"""
Projecost API - Main Application

FastAPI application serving the project-cost quoting service:
- Country registry with pricing multipliers
- Provider service catalog with priced tiers
- Quotes priced by tier, country and complexity
"""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import settings
from database.base import close_db, get_db_session, init_db
from services.country_service import CountryService
from services.exceptions import DomainError, ForbiddenError
from utils.logging import audit_logger, get_logger, request_logger, setup_logging

from api.routes import auth, countries, quotes, services

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    logger.info("Starting Projecost API", version=settings.app_version)

    # Initialize database
    await init_db()
    logger.info("Database initialized")

    if settings.seed_countries_on_startup:
        async with get_db_session() as session:
            created = await CountryService(session).seed_defaults()
        logger.info("Country registry seeded", created=created)

    yield

    logger.info("Shutting down Projecost API")
    await close_db()


app = FastAPI(
    title=settings.app_name,
    description="""
## Projecost API

Quote project costs across countries.

### Roles

- **client**: requests quotes and follows their status
- **freelancer / agency**: publishes services and manages received quotes
- **admin**: manages the country registry and every quote

### Authentication

Include the token returned by register or login in the Authorization
header: `Bearer <token>`. Quote requests and estimates work without one.
    """,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url=f"{settings.api_prefix}/docs" if settings.debug else None,
    redoc_url=f"{settings.api_prefix}/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing under a request id."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    start_time = time.perf_counter()

    request_logger.start(request_id, request.method, request.url.path)

    response = await call_next(request)

    duration_ms = (time.perf_counter() - start_time) * 1000
    response.headers["x-request-id"] = request_id

    request_logger.finish(response.status_code, duration_ms)

    return response


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """Map service-layer errors to their status code."""
    if isinstance(exc, ForbiddenError):
        caller = getattr(request.state, "caller", None)
        audit_logger.log_permission_denied(
            user_id=caller.id if caller else None,
            role=caller.role.value if caller else None,
            reason=exc.message,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers={"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with detailed messages."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": "Validation error",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors."""
    logger.error(
        "Unhandled exception",
        error_type=type(exc).__name__,
        error_message=str(exc),
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Server error"},
    )


# Include routers
app.include_router(auth.router, prefix=f"{settings.api_prefix}/auth", tags=["Authentication"])
app.include_router(countries.router, prefix=f"{settings.api_prefix}/countries", tags=["Countries"])
app.include_router(services.router, prefix=f"{settings.api_prefix}/services", tags=["Services"])
app.include_router(quotes.router, prefix=f"{settings.api_prefix}/quotes", tags=["Quotes"])


# Health check endpoint
@app.get("/health", tags=["System"])
async def health_check():
    """System health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/", tags=["System"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": f"{settings.api_prefix}/docs" if settings.debug else "Disabled in production",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers if not settings.debug else 1,
    )
