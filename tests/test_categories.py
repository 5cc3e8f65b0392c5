# tests/test_categories.py
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from conftest import assert_status

MISSING_ID = "0" * 24


@pytest.mark.timeout(10)
def test_create_category_returns_plain_refs(client, headers, users):
    r = client.post(
        "/categories",
        json={"name": "  Beverages ", "description": " Drinks and juices "},
        headers=headers["coordinador"],
    )
    body = assert_status(r, 201)
    assert body["success"] is True
    assert body["message"] == "Category created successfully"
    data = body["data"]
    assert data["name"] == "Beverages"
    assert data["description"] == "Drinks and juices"
    assert data["isActive"] is True
    assert data["createdBy"] == users["coordinador"].id
    assert len(data["id"]) == 24


@pytest.mark.timeout(10)
def test_duplicate_name_is_case_insensitive(client, headers, make_category):
    make_category("Beverages")
    r = client.post("/categories", json={"name": "beverages", "description": "x"}, headers=headers["admin"])
    body = assert_status(r, 400)
    assert body["error"] == "DuplicateError"
    assert body["message"] == "A category with that name already exists."


@pytest.mark.timeout(10)
@pytest.mark.parametrize(
    "payload, message",
    [
        ({"description": "d"}, "Category name is required."),
        ({"name": "   ", "description": "d"}, "Category name is required."),
        ({"name": "Beverages"}, "Description is required."),
        ({"name": "ab", "description": "d"}, "Category name must be between 3 and 50 characters."),
        ({"name": "x" * 51, "description": "d"}, "Category name must be between 3 and 50 characters."),
        ({"name": "Beverages", "description": "d" * 201}, "Description cannot exceed 200 characters."),
    ],
)
def test_create_validation(client, headers, payload, message):
    body = assert_status(client.post("/categories", json=payload, headers=headers["admin"]), 400)
    assert body["error"] == "ValidationError"
    assert body["message"] == message


@pytest.mark.timeout(10)
def test_list_newest_first_with_full_creator(client, headers, users, make_category):
    make_category("First")
    make_category("Second")
    body = assert_status(client.get("/categories", headers=headers["auxiliar"]), 200)
    assert body["count"] == 2
    assert [c["name"] for c in body["data"]] == ["Second", "First"]
    creator = body["data"][0]["createdBy"]
    admin = users["admin"]
    assert creator == {"id": admin.id, "name": admin.name, "email": admin.email, "role": "admin"}


@pytest.mark.timeout(10)
def test_get_populates_brief_creator(client, headers, users, make_category):
    cat = make_category()
    body = assert_status(client.get(f"/categories/{cat['id']}", headers=headers["auxiliar"]), 200)
    assert body["data"]["createdBy"] == {"id": users["admin"].id, "name": users["admin"].name, "role": "admin"}


@pytest.mark.timeout(10)
def test_invalid_id_vs_not_found(client, headers):
    body = assert_status(client.get("/categories/not-an-id", headers=headers["admin"]), 400)
    assert body["error"] == "InvalidId"
    assert body["message"] == "Invalid category id"

    body = assert_status(client.get(f"/categories/{MISSING_ID}", headers=headers["admin"]), 404)
    assert body["error"] == "NotFound"
    assert body["message"] == "Category not found"

    assert_status(client.put(f"/categories/{MISSING_ID}", json={"name": "Whatever"}, headers=headers["admin"]), 404)
    assert_status(client.delete(f"/categories/{MISSING_ID}", headers=headers["admin"]), 404)


@pytest.mark.timeout(10)
def test_update_partial_and_idempotent(client, headers, users, make_category):
    cat = make_category("Beverages", "Drinks")
    url = f"/categories/{cat['id']}"

    r1 = assert_status(client.put(url, json={"description": "Cold drinks"}, headers=headers["coordinador"]), 200)
    assert r1["message"] == "Category updated successfully"
    assert r1["data"]["name"] == "Beverages"
    assert r1["data"]["description"] == "Cold drinks"
    assert r1["data"]["updatedBy"] == users["coordinador"].id

    r2 = assert_status(client.put(url, json={"description": "Cold drinks"}, headers=headers["coordinador"]), 200)
    assert r2["data"]["description"] == r1["data"]["description"]
    assert r2["data"]["name"] == r1["data"]["name"]


@pytest.mark.timeout(10)
def test_update_empty_text_keeps_value(client, headers, make_category):
    cat = make_category("Beverages", "Drinks")
    body = assert_status(
        client.put(f"/categories/{cat['id']}", json={"name": "  ", "description": ""}, headers=headers["admin"]),
        200,
    )
    assert body["data"]["name"] == "Beverages"
    assert body["data"]["description"] == "Drinks"


@pytest.mark.timeout(10)
def test_update_can_toggle_active(client, headers, make_category):
    cat = make_category()
    body = assert_status(client.put(f"/categories/{cat['id']}", json={"isActive": False}, headers=headers["admin"]), 200)
    assert body["data"]["isActive"] is False


@pytest.mark.timeout(10)
def test_update_to_taken_name_is_duplicate(client, headers, make_category):
    make_category("Beverages")
    other = make_category("Snacks")
    body = assert_status(
        client.put(f"/categories/{other['id']}", json={"name": "BEVERAGES"}, headers=headers["admin"]), 400
    )
    assert body["error"] == "DuplicateError"


@pytest.mark.timeout(10)
def test_update_own_name_case_change_is_allowed(client, headers, make_category):
    cat = make_category("Beverages")
    body = assert_status(client.put(f"/categories/{cat['id']}", json={"name": "BEVERAGES"}, headers=headers["admin"]), 200)
    assert body["data"]["name"] == "BEVERAGES"


@pytest.mark.timeout(10)
def test_delete_returns_deleted_row(client, headers, make_category):
    cat = make_category()
    body = assert_status(client.delete(f"/categories/{cat['id']}", headers=headers["admin"]), 200)
    assert body["message"] == "Category deleted successfully"
    assert body["data"]["id"] == cat["id"]
    assert_status(client.get(f"/categories/{cat['id']}", headers=headers["admin"]), 404)


@pytest.mark.timeout(10)
@pytest.mark.parametrize(
    "first, second",
    [("Ñandú", "ñandú"), ("Électronique", "éLECTRONIQUE"), ("Straße", "STRAßE")],
)
def test_duplicate_name_folds_non_ascii(client, headers, make_category, first, second):
    make_category(first)
    body = assert_status(client.post("/categories", json={"name": second, "description": "d"}, headers=headers["admin"]), 400)
    assert body["error"] == "DuplicateError"


@pytest.mark.timeout(10)
def test_update_to_non_ascii_taken_name_is_duplicate(client, headers, make_category):
    make_category("Ñandú")
    other = make_category("Pingüino")
    body = assert_status(client.put(f"/categories/{other['id']}", json={"name": "ÑANDÚ"}, headers=headers["admin"]), 400)
    assert body["error"] == "DuplicateError"


@pytest.mark.timeout(10)
def test_timestamps_carry_utc_offset(client, headers, make_category):
    cat = make_category()
    data = assert_status(client.get(f"/categories/{cat['id']}", headers=headers["admin"]), 200)["data"]
    for key in ("createdAt", "updatedAt"):
        ts = datetime.fromisoformat(data[key].replace("Z", "+00:00"))
        assert ts.utcoffset() == timedelta(0), data[key]
