from fastapi.testclient import TestClient

from ecofinds.core.exceptions import EmptyCartError, ErrorCode, NotFoundError
from ecofinds.database.core import get_db
from main import app


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_responses_carry_request_id(client):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]
    assert client.get("/health").headers["X-Request-ID"] != response.headers["X-Request-ID"]


def test_malformed_body_is_400(auth_client):
    response = auth_client.post("/api/cart", content="not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "HTTP_404"


def test_unexpected_error_hides_details(db_session, mocker):
    mocker.patch(
        "ecofinds.products.controller.CategoryService.list_categories",
        side_effect=RuntimeError("connection string with password"),
    )
    app.dependency_overrides[get_db] = lambda: db_session
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/categories")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "INTERNAL_SERVER_ERROR"
    assert "password" not in response.text


def test_not_found_error_response_shape():
    error = NotFoundError("Product", 7)
    assert error.to_response() == {
        "error": {
            "code": "NOT_FOUND",
            "message": "Product not found",
            "context": {"resource": "Product", "id": "7"},
        }
    }


def test_error_without_context_omits_it():
    error = EmptyCartError()
    assert error.code == ErrorCode.EMPTY_CART
    assert error.to_response() == {"error": {"code": "EMPTY_CART", "message": "Cart is empty"}}
