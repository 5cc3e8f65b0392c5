# app/main.py
from __future__ import annotations

import os
import time
import uuid
from contextlib import asynccontextmanager
from typing import List, Optional, Tuple

from alembic.config import Config as AlembicConfig
from alembic.script import ScriptDirectory
from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from app.core.errors import CatalogError, ErrorKind, ERROR_STATUS, InternalError, error_payload
from app.core.logging import setup_logging
from app.core.settings import settings
from app.database import DATABASE_URL, DEFAULT_SCHEMA, SessionLocal, get_db, init_db, mask_url
from app.routers.category import router as categories_router
from app.routers.product import router as products_router
from app.routers.subcategory import router as subcategories_router

# --- Config ---
ALEMBIC_INI = os.getenv("ALEMBIC_CONFIG", "alembic.ini")
ALEMBIC_VERSION_TABLE = os.getenv("ALEMBIC_VERSION_TABLE", "alembic_version")


# --- Logging ---
logger = setup_logging(settings.LOG_LEVEL.upper())

tags_metadata = [
    {"name": "health", "description": "Liveness/Readiness checks"},
    {"name": "categories", "description": "Category CRUD"},
    {"name": "subcategories", "description": "Subcategory CRUD (scoped to a category)"},
    {"name": "products", "description": "Product CRUD"},
]


def _get_req_id_from_headers(request: Request) -> str:
    # Prefer X-Request-ID, apoi X-Correlation-ID; dacă lipsesc, generează unul.
    return (
        request.headers.get("x-request-id")
        or request.headers.get("x-correlation-id")
        or uuid.uuid4().hex[:12]
    )


def _json_error(request: Request, status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=content,
        headers={"X-Request-ID": _get_req_id_from_headers(request)},
    )


# --- Middleware func (registered after app is created) ---
async def request_context_mw(request: Request, call_next):
    """
    - Generează/propagă X-Request-ID
    - Headers de securitate minimale
    - Server-Timing / X-Process-Time
    """
    req_id = _get_req_id_from_headers(request)
    start = time.perf_counter()
    response: Response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000

    response.headers.setdefault("X-Request-ID", req_id)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("Cache-Control", "no-store")
    response.headers.setdefault("X-App-Version", settings.APP_VERSION)
    response.headers.setdefault("Server-Timing", f"app;dur={duration_ms:.1f}")
    response.headers.setdefault("X-Process-Time", f"{duration_ms:.1f}ms")
    return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: creează tabelele dacă SQLALCHEMY_CREATE_ALL=1, apoi sanity check DB
    try:
        init_db()
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        logger.info("DB startup check OK (url=%s, schema=%s)", mask_url(DATABASE_URL), DEFAULT_SCHEMA or "-")
    except Exception:
        logger.exception("DB startup check FAILED")
    yield


# --- App factory (create app BEFORE registering middleware) ---
app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.middleware("http")(request_context_mw)

# CORS din env: CORS_ORIGINS="http://localhost:3000,https://example.com"
if settings.CORS_ORIGINS:
    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Server-Timing", "X-Process-Time", "X-App-Version"],
    )


# --- Exception handlers ---
@app.exception_handler(CatalogError)
async def _catalog_error_handler(request: Request, exc: CatalogError):
    if exc.kind is ErrorKind.INTERNAL:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.error)
    return _json_error(request, exc.status_code, error_payload(exc))


@app.exception_handler(RequestValidationError)
async def _validation_handler(request: Request, exc: RequestValidationError):
    # body/params cu tip greșit sau JSON invalid -> ValidationError (400)
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{loc}: {first.get('msg')}" if loc else str(first.get("msg", "Invalid input"))
    return _json_error(
        request,
        ERROR_STATUS[ErrorKind.VALIDATION],
        {"success": False, "message": message, "error": ErrorKind.VALIDATION.value},
    )


@app.exception_handler(SQLAlchemyError)
async def _store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Store error: %s", exc)
    err = InternalError("Unexpected store failure", error=str(exc))
    return _json_error(request, err.status_code, error_payload(err))


# Prinde 404/405 Starlette și răspunde în același plic
@app.exception_handler(StarletteHTTPException)
async def _starlette_http_exc_handler(request: Request, exc: StarletteHTTPException):
    headers = dict(exc.headers or {})
    headers.setdefault("X-Request-ID", _get_req_id_from_headers(request))
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Not Found"
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method Not Allowed"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message, "path": str(request.url.path)},
        headers=headers,
    )


@app.exception_handler(Exception)
async def _unhandled_exc_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    err = InternalError("Internal Server Error", error=str(exc))
    return _json_error(request, err.status_code, error_payload(err))


# --- Helpers Alembic/health ---
def _get_db_alembic_version(db: Session) -> Tuple[Optional[str], bool]:
    table = f'"{DEFAULT_SCHEMA}"."{ALEMBIC_VERSION_TABLE}"' if DEFAULT_SCHEMA else f'"{ALEMBIC_VERSION_TABLE}"'
    try:
        version = db.execute(text(f"SELECT version_num FROM {table}")).scalar_one_or_none()
        return version, True
    except SQLAlchemyError:
        db.rollback()
        return None, False


def _get_pkg_alembic_heads() -> List[str]:
    cfg = AlembicConfig(ALEMBIC_INI)
    script = ScriptDirectory.from_config(cfg)
    return list(script.get_heads())


# --- Routes: health ---
@app.get("/", tags=["health"])
def root():
    return {"name": settings.APP_TITLE, "version": settings.APP_VERSION}


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


@app.get("/health/db", tags=["health"])
def health_db(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "db": "up", "dialect": db.get_bind().dialect.name}
    except SQLAlchemyError:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="DB not ready")


@app.get("/health/migrations", tags=["health"])
def health_migrations(db: Session = Depends(get_db)):
    db_version, present = _get_db_alembic_version(db)
    try:
        heads = _get_pkg_alembic_heads()
    except Exception as e:  # pragma: no cover
        return {"db_version": db_version, "present": present, "pkg_heads_error": str(e), "in_sync": None}
    head = heads[0] if heads else None
    return {
        "db_version": db_version,
        "present": present,
        "pkg_heads": heads,
        "in_sync": bool(db_version and head and db_version == head),
    }


# --- Routers ---
app.include_router(categories_router)
app.include_router(subcategories_router)
app.include_router(products_router)
