# app/database.py
from __future__ import annotations

import logging
import os
import re
from typing import Generator, Optional

from dotenv import load_dotenv
from sqlalchemy import MetaData, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

# .env pe host; în container variabilele vin din environment
load_dotenv()

logger = logging.getLogger(__name__)

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_SQLITE_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:", "sqlite+pysqlite:///:memory:"}


def _env_bool(key: str, default: bool = False) -> bool:
    val = os.getenv(key)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def mask_url(url: str) -> str:
    """Ascunde parola din URL pentru loguri."""
    if "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    if "@" not in rest or ":" not in rest.split("@", 1)[0]:
        return url
    creds, tail = rest.split("@", 1)
    return f"{scheme}://{creds.split(':', 1)[0]}:***@{tail}"


def _schema_from_env(raw: Optional[str]) -> Optional[str]:
    """Schema goală -> None (SQLite nu are scheme)."""
    raw = (raw or "").strip()
    if not raw:
        return None
    if not _IDENT_RE.fullmatch(raw):
        raise RuntimeError(f"DB_SCHEMA invalid: {raw!r}")
    return raw


# -----------------------------
# Config din environment
# -----------------------------
DATABASE_URL = (os.getenv("DATABASE_URL") or "sqlite:///./app.db").strip()
IS_SQLITE = DATABASE_URL.startswith("sqlite")

DEFAULT_SCHEMA = _schema_from_env(os.getenv("DB_SCHEMA", "" if IS_SQLITE else "app"))

ECHO_SQL = _env_bool("DB_ECHO", False)
POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "1800"))  # sec
USE_NULLPOOL = _env_bool("DB_USE_NULLPOOL", False)

# -----------------------------
# Metadata comună (nume stabile pentru indexuri/constrângeri în migrații)
# -----------------------------
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(schema=DEFAULT_SCHEMA, naming_convention=NAMING_CONVENTION)
Base = declarative_base(metadata=metadata)


def _engine_kwargs() -> dict:
    kwargs: dict = {"echo": ECHO_SQL, "pool_pre_ping": True}

    if IS_SQLITE:
        kwargs["connect_args"] = {"check_same_thread": False}
        # in-memory: o singură conexiune partajată, altfel fiecare conexiune vede alt DB
        kwargs["poolclass"] = StaticPool if DATABASE_URL in _SQLITE_MEMORY_URLS else NullPool
        return kwargs

    if USE_NULLPOOL:
        kwargs["poolclass"] = NullPool
    else:
        kwargs.update(pool_size=POOL_SIZE, max_overflow=MAX_OVERFLOW, pool_recycle=POOL_RECYCLE)

    if DATABASE_URL.startswith("postgresql") and DEFAULT_SCHEMA:
        kwargs["connect_args"] = {"options": f"-c search_path={DEFAULT_SCHEMA},public"}
    return kwargs


engine: Engine = create_engine(DATABASE_URL, **_engine_kwargs())


def _unicode_lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None


if IS_SQLITE:
    # lower() nativ din SQLite pliază doar ASCII; indexul funcțional și pre-check-urile folosesc aceeași funcție
    @event.listens_for(engine, "connect")
    def _register_sqlite_functions(dbapi_conn, _record) -> None:
        dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)


# expire_on_commit=False: rândul rămâne citibil după commit (ex. răspunsul la delete)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: o sesiune per request, rollback la excepție."""
    db: Session = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def import_models() -> None:
    """Înregistrează toate modelele pe metadata."""
    from app.models import category, product, subcategory, user  # noqa: F401


def init_db(force: bool = False) -> None:
    """
    Creează schema + tabelele din modele când SQLALCHEMY_CREATE_ALL=1 (sau force=True).
    Pentru dev/teste; în producție tabelele vin din Alembic.
    """
    if not (force or _env_bool("SQLALCHEMY_CREATE_ALL", False)):
        return
    if DEFAULT_SCHEMA and engine.dialect.name == "postgresql":
        with engine.begin() as conn:
            conn.exec_driver_sql(f'CREATE SCHEMA IF NOT EXISTS "{DEFAULT_SCHEMA}"')
    import_models()
    metadata.create_all(bind=engine)
    logger.info("Tables created from models (schema=%s)", DEFAULT_SCHEMA or "-")


__all__ = [
    "DATABASE_URL",
    "DEFAULT_SCHEMA",
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "import_models",
    "init_db",
    "mask_url",
    "metadata",
]
