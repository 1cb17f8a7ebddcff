import pytest

from conftest import make_product
from ecofinds.database.core import MAX_DB_INT


@pytest.fixture
def lamp(db_session, other_user):
    return make_product(db_session, other_user, title="Lamp", price_cents=1200)


def test_cart_requires_login(client):
    assert client.get("/api/cart").status_code == 401
    assert client.post("/api/cart", json={"productId": 1}).status_code == 401


def test_empty_cart_is_created_on_first_access(auth_client):
    response = auth_client.get("/api/cart")

    assert response.status_code == 200
    body = response.json()
    assert body["items"] == []
    assert body["itemCount"] == 0
    assert body["subtotalCents"] == 0
    assert auth_client.get("/api/cart").json()["cart"]["id"] == body["cart"]["id"]


def test_add_to_cart_merges(auth_client, lamp):
    first = auth_client.post("/api/cart", json={"productId": lamp.id, "qty": 2})
    second = auth_client.post("/api/cart", json={"productId": lamp.id, "qty": 3})

    assert first.status_code == 201
    assert second.json()["qty"] == 5

    cart = auth_client.get("/api/cart").json()
    assert cart["items"][0]["product"]["title"] == "Lamp"
    assert cart["items"][0]["product"]["priceCents"] == 1200
    assert cart["subtotalCents"] == 6000


def test_add_to_cart_defaults_quantity_to_one(auth_client, lamp):
    response = auth_client.post("/api/cart", json={"productId": lamp.id})
    assert response.json()["qty"] == 1


@pytest.mark.parametrize("qty", [0, -2, "3", 1.5])
def test_add_to_cart_rejects_bad_quantity(auth_client, lamp, qty):
    response = auth_client.post("/api/cart", json={"productId": lamp.id, "qty": qty})
    assert response.status_code == 400


def test_add_unknown_product(auth_client):
    response = auth_client.post("/api/cart", json={"productId": 404})
    assert response.status_code == 404


def test_update_quantity(auth_client, lamp):
    auth_client.post("/api/cart", json={"productId": lamp.id, "qty": 2})

    response = auth_client.patch(f"/api/cart/{lamp.id}", json={"qty": 7})

    assert response.status_code == 200
    assert response.json()["qty"] == 7


def test_update_quantity_to_zero_removes(auth_client, lamp):
    auth_client.post("/api/cart", json={"productId": lamp.id, "qty": 2})

    response = auth_client.patch(f"/api/cart/{lamp.id}", json={"qty": 0})

    assert response.status_code == 204
    assert auth_client.get("/api/cart").json()["items"] == []


def test_update_missing_item(auth_client, lamp):
    response = auth_client.patch(f"/api/cart/{lamp.id}", json={"qty": 3})
    assert response.status_code == 404


def test_remove_item_is_idempotent(auth_client, lamp):
    auth_client.post("/api/cart", json={"productId": lamp.id})

    assert auth_client.delete(f"/api/cart/{lamp.id}").status_code == 204
    assert auth_client.delete(f"/api/cart/{lamp.id}").status_code == 204
    assert auth_client.get("/api/cart").json()["items"] == []


def test_clear_cart(auth_client, lamp, db_session, other_user):
    chair = make_product(db_session, other_user, title="Chair")
    auth_client.post("/api/cart", json={"productId": lamp.id})
    auth_client.post("/api/cart", json={"productId": chair.id, "qty": 4})

    assert auth_client.delete("/api/cart").status_code == 204
    assert auth_client.get("/api/cart").json()["itemCount"] == 0


def test_cart_shows_current_price(auth_client, lamp, db_session):
    auth_client.post("/api/cart", json={"productId": lamp.id, "qty": 2})

    lamp.price_cents = 1000
    db_session.commit()

    cart = auth_client.get("/api/cart").json()
    assert cart["items"][0]["product"]["priceCents"] == 1000
    assert cart["subtotalCents"] == 2000


def test_oversized_cart_values_are_rejected(auth_client, lamp):
    huge = 2**63
    assert auth_client.post("/api/cart", json={"productId": huge}).status_code == 400
    assert auth_client.post("/api/cart", json={"productId": lamp.id, "qty": huge}).status_code == 400
    assert auth_client.patch(f"/api/cart/{huge}", json={"qty": 1}).status_code == 400
    assert auth_client.delete(f"/api/cart/{huge}").status_code == 400

    auth_client.post("/api/cart", json={"productId": lamp.id})
    assert auth_client.patch(f"/api/cart/{lamp.id}", json={"qty": huge}).status_code == 400


def test_merge_past_column_range_is_400(auth_client, lamp):
    auth_client.post("/api/cart", json={"productId": lamp.id, "qty": MAX_DB_INT})

    response = auth_client.post("/api/cart", json={"productId": lamp.id, "qty": 1})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_QUANTITY"
    assert auth_client.get("/api/cart").json()["items"][0]["qty"] == MAX_DB_INT
