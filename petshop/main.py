"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging
import time

from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import NoResultFound
from starlette.middleware.base import BaseHTTPMiddleware

from petshop.config import Settings
from petshop.exceptions import AdoptionError
from petshop.routers import adoptions, auth, pets

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests and responses."""

    async def dispatch(self, request: Request, call_next):
        """Log request and response details."""
        # Generate request ID for tracing
        request_id = id(request)

        start_time = time.time()
        logger.info(
            f"Request started: {request.method} {request.url.path}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None
            }
        )

        try:
            response = await call_next(request)

            duration = time.time() - start_time
            logger.info(
                f"Request completed: {request.method} {request.url.path} "
                f"-> {response.status_code}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round(duration * 1000, 2)
                }
            )

            return response

        except Exception as exc:
            duration = time.time() - start_time
            logger.error(
                f"Request failed: {request.method} {request.url.path}",
                exc_info=True,
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": round(duration * 1000, 2),
                    "error_type": type(exc).__name__,
                    "error_message": str(exc)
                }
            )

            # Re-raise to let exception handlers deal with it
            raise


# Create settings instance for the application
settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events."""
    logger.info(f"Application started: {settings.app_name} (debug={settings.debug})")

    yield

    logger.info(f"Application shutdown: {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="""
    Pet Shop Adoption API

    * **Authentication**: User registration, login, and JWT-based authentication
    * **Pets**: Browse adoptable pets; administrators manage pet records
    * **Adoptions**: Apply to adopt a pet; administrators approve or reject applications

    ## Adoption lifecycle

    A pet is `available` until someone applies, then `pending` while any
    application awaits a decision. Approving an application marks the pet
    `adopted` and rejects every competing application. Rejecting or
    withdrawing the last pending application makes the pet `available`
    again.

    ## Authentication

    1. Register at `/api/auth/register`
    2. Login at `/api/auth/jwt/login` to receive a JWT token
    3. Include the token in the `Authorization` header as `Bearer <token>`

    ## Error Handling

    All errors return JSON with:
    - `detail`: Human-readable error message
    - `error_code`: Machine-readable error code

    Common HTTP status codes:
    - `400`: Invalid argument (e.g. unknown application status)
    - `401`: Unauthorized (authentication required)
    - `403`: Forbidden (not authorized)
    - `404`: Not Found
    - `409`: Conflict (pet not adoptable, duplicate or already decided application)
    - `422`: Validation Error
    - `500`: Internal Server Error
    """,
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "auth",
            "description": "Authentication operations including registration, login, and password management.",
        },
        {
            "name": "users",
            "description": "Current user profile.",
        },
        {
            "name": "pets",
            "description": "Browse pets, manage pet records, and apply to adopt a pet.",
        },
        {
            "name": "adoptions",
            "description": "Review, decide and withdraw adoption applications.",
        },
    ],
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add logging middleware
app.add_middleware(LoggingMiddleware)


@app.get("/")
async def root() -> dict:
    """Root endpoint returning API information."""
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "operational",
        "docs": "/api/docs"
    }


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(pets.router, tags=["pets"])
app.include_router(adoptions.router, tags=["adoptions"])


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app_name": settings.app_name
    }


# Global exception handlers

@app.exception_handler(AdoptionError)
async def adoption_error_handler(request: Request, exc: AdoptionError) -> JSONResponse:
    """Translate domain errors raised by services into HTTP responses."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code}: {request.url.path} - {exc.message}")
    else:
        logger.info(f"{exc.error_code} ({exc.status_code}): {request.url.path} - {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response()
    )


@app.exception_handler(NoResultFound)
async def not_found_handler(request: Request, exc: NoResultFound) -> JSONResponse:
    """Handle SQLAlchemy NoResultFound exceptions."""
    logger.warning(f"Resource not found: {request.url.path}")
    return JSONResponse(
        status_code=404,
        content={
            "detail": "Resource not found",
            "error_code": "NOT_FOUND"
        }
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions including authorization errors."""
    # Log based on status code
    if exc.status_code == 403:
        logger.warning(
            f"Authorization failure: {request.url.path} - User attempted to access forbidden resource"
        )
    elif exc.status_code >= 500:
        logger.error(f"HTTP error {exc.status_code}: {request.url.path} - {exc.detail}")
    else:
        logger.info(f"HTTP {exc.status_code}: {request.url.path}")

    # Map status codes to error codes
    error_code_map = {
        404: "NOT_FOUND",
        403: "FORBIDDEN",
        401: "UNAUTHORIZED",
        409: "CONFLICT",
        422: "VALIDATION_ERROR",
        400: "BAD_REQUEST",
    }

    error_code = error_code_map.get(exc.status_code, f"HTTP_{exc.status_code}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "error_code": error_code
        },
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions."""
    logger.error(
        f"Unhandled exception: {request.url.path}",
        exc_info=True,
        extra={
            "method": request.method,
            "url": str(request.url),
            "client": request.client.host if request.client else None
        }
    )

    if settings.debug:
        # In debug mode, return detailed error information
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "error_code": "INTERNAL_ERROR",
                "error_type": type(exc).__name__,
                "error_message": str(exc)
            }
        )
    else:
        # In production, return generic error message
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "error_code": "INTERNAL_ERROR"
            }
        )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "petshop.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
