"""
FastAPI application for the AvaTax sync backend.

Startup creates the tables. Every response carries an ``X-Request-ID``;
every failure is rendered as an ``ErrorResponse`` envelope.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy import text
import time
import uuid
import os
from contextlib import asynccontextmanager
from app.api.v1 import api_router
from app.config import LOG_LEVEL, LOG_FILE
from app.database import SessionLocal, init_db
from app.exceptions import AvaTaxError, AvaTaxConnectionError, CouldNotSaveError, NoSuchEntityError
from app.models.schemas.base import ErrorResponse
from app.utils import setup_logging, get_logger

SERVICE_NAME = "avatax-sync-backend"
SERVICE_VERSION = "1.0.0"

setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE, enable_console=True)

logger = get_logger(__name__)

_STATUS_BY_ERROR = {
    NoSuchEntityError: 404,
    CouldNotSaveError: 500,
    AvaTaxConnectionError: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting service", service=SERVICE_NAME, version=SERVICE_VERSION)
    try:
        init_db()
    except Exception as e:  # pragma: no cover
        logger.error("Database initialisation failed", error=str(e), exc_info=True)
        raise
    yield
    logger.info("Service stopped", service=SERVICE_NAME)

app = FastAPI(
    title="AvaTax Sync Backend",
    description="""
    Keeps a commerce platform's invoices in step with AvaTax.

    * Scoped AvaTax settings (store, website, default) with fallback
    * Credential and connectivity validation every time settings are saved
    * Advisory notice when native tax rules are configured alongside AvaTax
    * AvaTax reconciliation fields stored with each invoice
    * Submission queue entry for every newly created invoice

    Settings, store and queue endpoints expect `Authorization: Bearer <token>`
    when `ADMIN_API_TOKEN` is configured.
    """,
    version=SERVICE_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/api/v1/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")

def _envelope(request: Request, status_code: int, message, headers=None, **extra) -> JSONResponse:
    body = ErrorResponse(message=message, request_id=_request_id(request), **extra)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude_none=True),
        headers=headers,
    )


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Assign a request id, time the request and add response headers."""
    request.state.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    started = time.perf_counter()

    response = await call_next(request)

    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
    response.headers["X-Request-ID"] = request.state.request_id
    response.headers["X-Process-Time"] = str(elapsed_ms)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"

    logger.info(
        "Request handled",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        process_time_ms=elapsed_ms,
        request_id=request.state.request_id
    )
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    logger.warning("Request validation failed", path=request.url.path, errors=errors, request_id=_request_id(request))
    return _envelope(request, 422, "Request validation failed", details=errors)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(
        "HTTP exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail,
        request_id=_request_id(request)
    )
    return _envelope(request, exc.status_code, exc.detail, headers=getattr(exc, "headers", None))

@app.exception_handler(AvaTaxError)
async def avatax_error_handler(request: Request, exc: AvaTaxError):
    """Map typed service errors to HTTP statuses; unknown subclasses are 500."""
    status_code = next(
        (code for cls, code in _STATUS_BY_ERROR.items() if isinstance(exc, cls)),
        500,
    )
    log = logger.warning if status_code < 500 else logger.error
    log(
        "Service error",
        path=request.url.path,
        code=exc.code,
        error=exc.message,
        status_code=status_code,
        request_id=_request_id(request)
    )
    return _envelope(request, status_code, exc.message, code=exc.code)

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
        request_id=_request_id(request),
        exc_info=True
    )
    return _envelope(request, 500, "Internal server error")


@app.get("/health", tags=["health"], summary="Liveness check")
async def health_check():
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "timestamp": time.time(),
    }

@app.get("/health/detailed", tags=["health"], summary="Readiness check")
async def detailed_health_check():
    """Liveness plus a round trip to the database."""
    checks = {}
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
    except Exception as e:
        checks["database"] = f"unhealthy: {e}"
    finally:
        db.close()

    return {
        "status": "healthy" if all(v == "healthy" for v in checks.values()) else "degraded",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "timestamp": time.time(),
        "checks": checks,
    }

@app.get("/", tags=["root"])
async def root():
    return {
        "message": "AvaTax Sync Backend API",
        "version": SERVICE_VERSION,
        "documentation": "/docs",
        "health_check": "/health",
        "api_base": "/api/v1"
    }

app.include_router(api_router, prefix="/api/v1")

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
        reload_dirs=["app"],
        log_level="info",
    )
