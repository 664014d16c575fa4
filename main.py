import sys
import time
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import (
    API_NAME, API_VERSION, CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, CORS_ALLOW_ORIGINS,
    CORS_EXPOSE_HEADERS, CORS_MAX_AGE, GZIP_MINIMUM_SIZE, IS_PRODUCTION,
)
from app.exceptions import ApiError, DatasetError, UnknownEndpoint
from app.logging_setup import setup_logging, logger
from app.routes import router
from app.security import (
    ApiKeyTrackingMiddleware, QuerySanitizerMiddleware, SecurityHeadersMiddleware, limiter,
)
from app.services.data_loader import load_dataset

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.
    """
    setup_logging()
    logger.info("--- Application Starting Up ---")

    try:
        load_dataset()
    except DatasetError as e:
        logger.critical(f"Could not load the dataset on startup: {e}", exc_info=True)
        # Exit with a non-zero status code to tell the supervisor the service failed
        sys.exit(1)

    yield
    logger.info("--- Application Shutting Down ---")

app = FastAPI(
    title=API_NAME,
    description="A read-only API serving Stranger Things characters, creatures, episodes, locations and quotes.",
    version=API_VERSION,
    default_response_class=ORJSONResponse,
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)
app.state.limiter = limiter


# EXCEPTION HANDLERS

@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error(
            exc.message,
            extra={"method": request.method, "url": str(request.url), "error": exc.error},
        )
    return ORJSONResponse(status_code=exc.status_code, content=exc.to_envelope())

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return ORJSONResponse(
        status_code=400,
        content={
            "error": "Bad Request",
            "message": "Invalid request parameters.",
            "code": 400,
            "details": jsonable_encoder(exc.errors()),
        },
    )

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        content = UnknownEndpoint().to_envelope()
    else:
        content = {
            "error": HTTPStatus(exc.status_code).phrase,
            "message": str(exc.detail),
            "code": exc.status_code,
        }
    return ORJSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """
    Synchronous: SlowAPIMiddleware invokes the handler without awaiting it.
    """
    logger.warning(
        "Rate limit exceeded",
        extra={"client": get_remote_address(request), "url": str(request.url), "limit": exc.detail},
    )
    if request.url.path.endswith("/random"):
        message = "Random endpoint rate limit exceeded. Please wait before trying again."
    else:
        message = f"You have exceeded the rate limit of {exc.detail}. Please try again later."
    return ORJSONResponse(
        status_code=429,
        content={"error": "Too Many Requests", "message": message, "code": 429},
        headers={"Retry-After": str(exc.limit.limit.get_expiry())},
    )

app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


# MIDDLEWARE CONFIGURATION
# Starlette runs middleware in reverse registration order: the last one added is outermost.

app.add_middleware(ApiKeyTrackingMiddleware)
app.add_middleware(SlowAPIMiddleware)

@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """
    Global middleware to handle logging and uncaught exceptions.
    """
    start_time = time.time()
    logger.info(
        "Request received",
        extra={"method": request.method, "url": str(request.url)}
    )
    try:
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        logger.info(
            "Request completed",
            extra={
                "method": request.method,
                "url": str(request.url),
                "status_code": response.status_code,
                "process_time_ms": f"{process_time:.2f}",
            },
        )
        return response
    except Exception as e:
        logger.critical(
            "Unhandled exception",
            extra={"method": request.method, "url": str(request.url), "error": str(e)},
            exc_info=True,
        )
        return ORJSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": "An unexpected error occurred." if IS_PRODUCTION else str(e),
                "code": 500,
                "correlation_id": correlation_id.get(),
            },
        )

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(QuerySanitizerMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=GZIP_MINIMUM_SIZE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=False,
    allow_methods=CORS_ALLOW_METHODS,
    allow_headers=CORS_ALLOW_HEADERS,
    expose_headers=CORS_EXPOSE_HEADERS,
    max_age=CORS_MAX_AGE,
)

#ROUTER INCLUSION
app.include_router(router)
