# tests/conftest.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Dict, Iterator

# --- Env înainte de orice import din app (engine/settings se citesc la import) ---
ROOT = Path(__file__).resolve().parents[1]
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_SCHEMA"] = ""
os.environ["JWT_SECRET"] = "test-secret"
os.environ["SQLALCHEMY_CREATE_ALL"] = "1"
os.environ.setdefault("ALEMBIC_CONFIG", str(ROOT / "alembic.ini"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.core.security import create_access_token  # noqa: E402
from app.database import SessionLocal, engine, init_db, metadata  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User  # noqa: E402

init_db(force=True)

ROLES = ("admin", "coordinador", "auxiliar")


# --- Utilitare (importate și din teste) ---------------------------------------
def dump_response(r: httpx.Response) -> str:
    """Diagnostic compact pentru mesaje de aserție."""
    try:
        j = r.json()
    except Exception:
        j = None
    snippet = (r.text or "")[:500].replace("\n", "\\n")
    return f"status={r.status_code} {r.request.method} {r.request.url} json={j!r} text='{snippet}...'"


def assert_status(r: httpx.Response, expected: int | tuple[int, ...]) -> Dict:
    if isinstance(expected, int):
        ok = r.status_code == expected
        exp_str = str(expected)
    else:
        ok = r.status_code in expected
        exp_str = "|".join(map(str, expected))
    assert ok, f"expected {exp_str} but got: {dump_response(r)}"
    return r.json()


# --- Fixuri -------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _clean_tables() -> Iterator[None]:
    """Fiecare test pornește de la tabele goale."""
    yield
    with engine.begin() as conn:
        for table in reversed(metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def users(db: Session) -> Dict[str, User]:
    """Un utilizator per rol, inserat direct (serviciul de identitate e extern)."""
    out: Dict[str, User] = {}
    for role in ROLES:
        u = User(name=f"{role.title()} User", email=f"{role}@example.com", role=role)
        db.add(u)
        out[role] = u
    db.commit()
    return out


@pytest.fixture
def headers(users: Dict[str, User]) -> Dict[str, Dict[str, str]]:
    """role -> {"Authorization": "Bearer <token>"}"""
    return {
        role: {"Authorization": f"Bearer {create_access_token(u.id, u.role, u.email)}"}
        for role, u in users.items()
    }


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_category(client: TestClient, headers) -> Callable[..., Dict]:
    def _make(name: str = "Beverages", description: str = "Drinks and juices") -> Dict:
        r = client.post("/categories", json={"name": name, "description": description}, headers=headers["admin"])
        return assert_status(r, 201)["data"]

    return _make


@pytest.fixture
def make_subcategory(client: TestClient, headers) -> Callable[..., Dict]:
    def _make(category_id: str, name: str = "Sodas", description: str = "Carbonated") -> Dict:
        r = client.post(
            "/subcategories",
            json={"name": name, "description": description, "category": category_id},
            headers=headers["admin"],
        )
        return assert_status(r, 201)["data"]

    return _make


@pytest.fixture
def make_product(client: TestClient, headers) -> Callable[..., Dict]:
    def _make(category_id: str, subcategory_id: str, name: str = "Cola 2L", **extra) -> Dict:
        body = {
            "name": name,
            "description": "Sparkling soft drink",
            "price": 2.5,
            "stock": 40,
            "category": category_id,
            "subcategory": subcategory_id,
        }
        body.update(extra)
        r = client.post("/products", json=body, headers=headers["admin"])
        return assert_status(r, 201)["data"]

    return _make
