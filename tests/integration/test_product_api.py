"""Integration tests for catalog endpoints via TestClient."""

from factories import add_product


def _create(client, admin, **overrides):
    body = {
        "id": 101,
        "name": "Handwoven Cotton Saree",
        "price": 2499.0,
        "originalPrice": 3199.0,
        "category": ["Sarees"],
        "images": ["https://cdn.example.com/a.jpg"],
        "sellerTag": "Bestseller",
    }
    body.update(overrides)
    return client.post("/products", json=body, headers=admin)


class TestBrowseProducts:
    def test_page_shape(self, client):
        for product_id in range(1, 26):
            add_product(product_id=product_id, name=f"Product {product_id:02d}")
        response = client.get("/products", params={"page": 2, "limit": 10})
        assert response.status_code == 200
        data = response.json()
        assert len(data["products"]) == 10
        assert data["products"][0]["id"] == 11
        assert data["totalPages"] == 3
        assert data["currentPage"] == 2
        assert data["totalProducts"] == 25

    def test_limit_clamped(self, client):
        for product_id in range(1, 56):
            add_product(product_id=product_id, name=f"Product {product_id:02d}")
        data = client.get("/products", params={"limit": 1000}).json()
        assert len(data["products"]) == 50

    def test_wire_format_is_camel_case(self, client):
        add_product(categories=["Sarees"], images=["https://cdn.example.com/a.jpg"], seller_tag="New")
        product = client.get("/products").json()["products"][0]
        assert product["id"] == 101
        assert product["category"] == ["Sarees"]
        assert product["sellerTag"] == "New"
        assert product["reviewsCount"] == 0
        assert "dateAdded" in product


class TestProductDetails:
    def test_found(self, client):
        add_product()
        response = client.get("/products/101")
        assert response.status_code == 200
        assert response.json()["name"] == "Handwoven Cotton Saree"

    def test_missing(self, client):
        response = client.get("/products/999")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Product with ID 999 not found."}


class TestProductAdmin:
    def test_create_requires_admin(self, client):
        response = client.post("/products", json={"id": 1, "name": "Cotton Kurta", "price": 10})
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"

    def test_wrong_secret(self, client):
        response = _create(client, {"X-Admin-Secret": "nope"})
        assert response.status_code == 401

    def test_secret_in_query(self, client, admin):
        body = {"id": 5, "name": "Cotton Kurta", "price": 799}
        response = client.post("/products", params={"secret": admin["X-Admin-Secret"]}, json=body)
        assert response.status_code == 201

    def test_create(self, client, admin):
        response = _create(client, admin)
        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 101
        assert data["originalPrice"] == 3199.0
        assert data["rating"] == 0.0
        assert data["reviewsCount"] == 0

    def test_create_ignores_rating_fields(self, client, admin):
        response = _create(client, admin, rating=5, reviewsCount=40)
        assert response.json()["rating"] == 0.0
        assert response.json()["reviewsCount"] == 0

    def test_create_duplicate(self, client, admin):
        _create(client, admin)
        response = _create(client, admin)
        assert response.status_code == 409
        assert response.json()["success"] is False

    def test_create_invalid_name(self, client, admin):
        response = _create(client, admin, name="ab")
        assert response.status_code == 400
        assert "name" in response.json()["details"]

    def test_create_missing_price(self, client, admin):
        response = client.post("/products", json={"id": 3, "name": "Cotton Kurta"}, headers=admin)
        assert response.status_code == 400

    def test_update(self, client, admin):
        _create(client, admin)
        response = client.put("/products/101", json={"price": 1999.0}, headers=admin)
        assert response.status_code == 200
        assert response.json()["price"] == 1999.0
        assert response.json()["name"] == "Handwoven Cotton Saree"

    def test_update_missing(self, client, admin):
        response = client.put("/products/999", json={"price": 1.0}, headers=admin)
        assert response.status_code == 404

    def test_delete(self, client, admin):
        _create(client, admin)
        response = client.delete("/products/101", headers=admin)
        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully."}
        assert client.get("/products/101").status_code == 404

    def test_delete_missing(self, client, admin):
        assert client.delete("/products/999", headers=admin).status_code == 404
