# tests/test_products.py
from __future__ import annotations

from typing import Dict, Tuple

import pytest

from conftest import assert_status

MISSING_ID = "0" * 24


@pytest.fixture
def tree(make_category, make_subcategory) -> Tuple[Dict, Dict]:
    cat = make_category("Beverages", "Drinks")
    sub = make_subcategory(cat["id"], "Sodas", "Carbonated")
    return cat, sub


def _body(cat: Dict, sub: Dict, **overrides) -> Dict:
    body = {
        "name": "Cola 2L",
        "description": "Sparkling soft drink",
        "price": 2.5,
        "stock": 40,
        "category": cat["id"],
        "subcategory": sub["id"],
        "images": ["https://cdn.example.com/cola.png", "  "],
    }
    body.update(overrides)
    return body


@pytest.mark.timeout(10)
def test_create_populates_refs_and_creator(client, headers, users, tree):
    cat, sub = tree
    body = assert_status(client.post("/products", json=_body(cat, sub), headers=headers["coordinador"]), 201)
    assert body["message"] == "Product created successfully"
    data = body["data"]
    assert data["price"] == 2.5
    assert data["stock"] == 40
    assert data["images"] == ["https://cdn.example.com/cola.png"]
    assert data["category"] == {"id": cat["id"], "name": "Beverages"}
    assert data["subcategory"] == {"id": sub["id"], "name": "Sodas"}
    u = users["coordinador"]
    assert data["createdBy"] == {"id": u.id, "name": u.name, "email": u.email, "role": "coordinador"}


@pytest.mark.timeout(10)
@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"name": ""}, "Product name is required."),
        ({"description": "  "}, "Description is required."),
        ({"price": 0}, "Price must be greater than zero."),
        ({"price": -3}, "Price must be greater than zero."),
        ({"price": None}, "Price must be greater than zero."),
        ({"stock": None}, "Stock is required."),
        ({"stock": -1}, "Stock cannot be negative."),
    ],
)
def test_create_validation(client, headers, tree, overrides, message):
    cat, sub = tree
    body = assert_status(client.post("/products", json=_body(cat, sub, **overrides), headers=headers["admin"]), 400)
    assert body["error"] == "ValidationError"
    assert body["message"] == message


@pytest.mark.timeout(10)
def test_create_non_integer_stock_is_validation_error(client, headers, tree):
    cat, sub = tree
    body = assert_status(client.post("/products", json=_body(cat, sub, stock=2.75), headers=headers["admin"]), 400)
    assert body["error"] == "ValidationError"


@pytest.mark.timeout(10)
def test_create_missing_category_is_404(client, headers, tree):
    _, sub = tree
    body = assert_status(
        client.post("/products", json=_body({"id": MISSING_ID}, sub), headers=headers["admin"]), 404
    )
    assert body["message"] == "Category does not exist"


@pytest.mark.timeout(10)
def test_create_with_subcategory_of_other_category_is_404(client, headers, make_category, make_subcategory, tree):
    cat, _ = tree
    other = make_category("Snacks")
    chips = make_subcategory(other["id"], "Chips")
    body = assert_status(client.post("/products", json=_body(cat, chips), headers=headers["admin"]), 404)
    assert body["error"] == "NotFound"
    assert body["message"] == "Subcategory does not exist or does not belong to the specified category"


@pytest.mark.timeout(10)
def test_duplicate_in_scope_is_case_insensitive(client, headers, make_product, tree):
    cat, sub = tree
    make_product(cat["id"], sub["id"], "Cola 2L")
    body = assert_status(client.post("/products", json=_body(cat, sub, name="COLA 2l"), headers=headers["admin"]), 400)
    assert body["error"] == "DuplicateError"
    assert body["message"] == "A product with that name already exists in this category and subcategory."


@pytest.mark.timeout(10)
def test_same_name_other_scope_hits_global_index(client, headers, make_category, make_subcategory, make_product, tree):
    cat, sub = tree
    make_product(cat["id"], sub["id"], "Cola 2L")
    other = make_category("Snacks")
    chips = make_subcategory(other["id"], "Chips")
    body = assert_status(client.post("/products", json=_body(other, chips, name="Cola 2L"), headers=headers["admin"]), 400)
    assert body["error"] == "DuplicateError"
    assert body["message"] == "A product with that name already exists."


@pytest.mark.timeout(10)
def test_list_and_get_populate_shapes(client, headers, users, make_product, tree):
    cat, sub = tree
    make_product(cat["id"], sub["id"], "Cola 2L")
    p = make_product(cat["id"], sub["id"], "Lemonade")
    admin = users["admin"]

    body = assert_status(client.get("/products", headers=headers["auxiliar"]), 200)
    assert body["count"] == 2
    assert [x["name"] for x in body["data"]] == ["Lemonade", "Cola 2L"]
    first = body["data"][0]
    assert first["category"] == {"id": cat["id"], "name": "Beverages"}
    assert first["createdBy"] == {"id": admin.id, "name": admin.name, "role": "admin"}

    body = assert_status(client.get(f"/products/{p['id']}", headers=headers["auxiliar"]), 200)
    data = body["data"]
    assert data["category"] == {"id": cat["id"], "name": "Beverages", "description": "Drinks"}
    assert data["subcategory"] == {"id": sub["id"], "name": "Sodas", "description": "Carbonated"}


@pytest.mark.timeout(10)
def test_invalid_id_vs_not_found(client, headers):
    assert assert_status(client.get("/products/zzz", headers=headers["admin"]), 400)["message"] == "Invalid product id"
    assert assert_status(client.get(f"/products/{MISSING_ID}", headers=headers["admin"]), 404)["message"] == "Product not found"


@pytest.mark.timeout(10)
def test_update_populates_updater(client, headers, users, make_product, tree):
    cat, sub = tree
    p = make_product(cat["id"], sub["id"])
    body = assert_status(
        client.put(f"/products/{p['id']}", json={"price": 3.1, "stock": 0}, headers=headers["coordinador"]), 200
    )
    assert body["message"] == "Product updated successfully"
    data = body["data"]
    assert data["price"] == 3.1
    assert data["stock"] == 0
    assert data["subcategory"] == {"id": sub["id"], "name": "Sodas"}
    u = users["coordinador"]
    assert data["updatedBy"] == {"id": u.id, "name": u.name, "role": "coordinador"}
    assert data["createdBy"] == users["admin"].id


@pytest.mark.timeout(10)
def test_update_allows_zero_price_but_not_negative(client, headers, make_product, tree):
    cat, sub = tree
    p = make_product(cat["id"], sub["id"])
    assert_status(client.put(f"/products/{p['id']}", json={"price": 0}, headers=headers["admin"]), 200)
    body = assert_status(client.put(f"/products/{p['id']}", json={"price": -1}, headers=headers["admin"]), 400)
    assert body["message"] == "Price cannot be negative."


@pytest.mark.timeout(10)
def test_update_duplicate_scope_is_looser(client, headers, make_category, make_subcategory, make_product, tree):
    cat, sub = tree
    other = make_category("Snacks")
    chips = make_subcategory(other["id"], "Chips")
    make_product(cat["id"], sub["id"], "Cola 2L")
    crisps = make_product(other["id"], chips["id"], "Crisps")

    # fără categorie/subcategorie în patch: numele se caută peste tot
    body = assert_status(client.put(f"/products/{crisps['id']}", json={"name": "cola 2l"}, headers=headers["admin"]), 400)
    assert body["message"] == "A product with that name already exists in this category and subcategory."

    # cu scope-ul propriu în patch nu există coliziune
    assert_status(
        client.put(
            f"/products/{crisps['id']}",
            json={"name": "Crisps XL", "category": other["id"], "subcategory": chips["id"]},
            headers=headers["admin"],
        ),
        200,
    )


@pytest.mark.timeout(10)
def test_update_revalidates_category_subcategory_pair(client, headers, make_category, make_subcategory, make_product, tree):
    cat, sub = tree
    other = make_category("Snacks")
    chips = make_subcategory(other["id"], "Chips")
    p = make_product(cat["id"], sub["id"])
    url = f"/products/{p['id']}"

    # subcategorie care nu aparține categoriei curente
    assert_status(client.put(url, json={"subcategory": chips["id"]}, headers=headers["admin"]), 404)
    # categorie nouă fără subcategorie potrivită
    assert_status(client.put(url, json={"category": other["id"]}, headers=headers["admin"]), 404)
    # categorie inexistentă
    body = assert_status(client.put(url, json={"category": MISSING_ID}, headers=headers["admin"]), 404)
    assert body["message"] == "Category does not exist"
    # pereche consistentă
    body = assert_status(
        client.put(url, json={"category": other["id"], "subcategory": chips["id"]}, headers=headers["admin"]), 200
    )
    assert body["data"]["category"] == {"id": other["id"], "name": "Snacks"}


@pytest.mark.timeout(10)
def test_delete_returns_plain_refs(client, headers, make_product, tree):
    cat, sub = tree
    p = make_product(cat["id"], sub["id"])
    assert_status(client.delete(f"/products/{p['id']}", headers=headers["coordinador"]), 403)
    body = assert_status(client.delete(f"/products/{p['id']}", headers=headers["admin"]), 200)
    assert body["message"] == "Product deleted successfully"
    assert body["data"]["category"] == cat["id"]
    assert body["data"]["subcategory"] == sub["id"]
    assert_status(client.get(f"/products/{p['id']}", headers=headers["admin"]), 404)


@pytest.mark.timeout(10)
def test_duplicate_in_scope_folds_non_ascii(client, headers, make_product, tree):
    cat, sub = tree
    make_product(cat["id"], sub["id"], "Jugo de Piña")
    body = assert_status(client.post("/products", json=_body(cat, sub, name="JUGO DE PIÑA"), headers=headers["admin"]), 400)
    assert body["message"] == "A product with that name already exists in this category and subcategory."
