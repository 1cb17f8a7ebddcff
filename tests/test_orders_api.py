from conftest import make_product


def test_orders_require_login(client):
    assert client.get("/api/orders").status_code == 401
    assert client.post("/api/orders").status_code == 401


def test_place_order_with_empty_cart(auth_client):
    response = auth_client.post("/api/orders")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "EMPTY_CART"
    assert auth_client.get("/api/orders").json() == []


def test_place_order(auth_client, db_session, test_user, other_user):
    lamp = make_product(db_session, other_user, title="Lamp", price_cents=1000)
    book = make_product(db_session, other_user, title="Book", price_cents=500)
    auth_client.post("/api/cart", json={"productId": lamp.id, "qty": 2})
    auth_client.post("/api/cart", json={"productId": book.id})

    response = auth_client.post("/api/orders")

    assert response.status_code == 201
    order = response.json()
    assert order["userId"] == str(test_user.id)
    assert order["totalCents"] == 2500
    assert order["status"] == "completed"
    lines = {item["product"]["title"]: (item["qty"], item["priceCents"]) for item in order["items"]}
    assert lines == {"Lamp": (2, 1000), "Book": (1, 500)}

    assert auth_client.get("/api/cart").json()["items"] == []


def test_order_history_keeps_purchase_price(auth_client, db_session, other_user):
    lamp = make_product(db_session, other_user, price_cents=1000)
    auth_client.post("/api/cart", json={"productId": lamp.id})
    auth_client.post("/api/orders")

    lamp.price_cents = 4000
    db_session.commit()

    history = auth_client.get("/api/orders").json()
    assert len(history) == 1
    assert history[0]["items"][0]["priceCents"] == 1000
    assert history[0]["totalCents"] == 1000


def test_order_history_newest_first(auth_client, db_session, other_user):
    lamp = make_product(db_session, other_user)
    placed = []
    for qty in (1, 2):
        auth_client.post("/api/cart", json={"productId": lamp.id, "qty": qty})
        placed.append(auth_client.post("/api/orders").json()["id"])

    history = auth_client.get("/api/orders").json()
    assert [order["id"] for order in history] == list(reversed(placed))
