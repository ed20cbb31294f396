"""Integration tests for the wishlist endpoints."""


class TestWishlistEndpoints:
    def test_empty_wishlist(self, client, customer):
        response = client.get("/wishlist", headers=customer)
        assert response.json() == {"customer_id": "cust-001", "product_ids": [], "product_count": 0}

    def test_add_and_remove(self, client, customer):
        client.post("/wishlist", json={"product_id": "prod-aviator"}, headers=customer)
        response = client.post("/wishlist", json={"product_id": "prod-reader"}, headers=customer)
        assert response.json()["product_ids"] == ["prod-aviator", "prod-reader"]

        response = client.delete("/wishlist/prod-aviator", headers=customer)
        assert response.json()["product_ids"] == ["prod-reader"]
        assert response.json()["product_count"] == 1

    def test_duplicate_is_a_conflict(self, client, customer):
        client.post("/wishlist", json={"product_id": "prod-aviator"}, headers=customer)

        response = client.post("/wishlist", json={"product_id": "prod-aviator"}, headers=customer)

        assert response.status_code == 409
        assert response.json()["details"] == {"product_id": ["Product already in wishlist"]}

    def test_inactive_product(self, client, customer):
        response = client.post("/wishlist", json={"product_id": "prod-retired"}, headers=customer)
        assert response.status_code == 404

    def test_clear(self, client, customer):
        client.post("/wishlist", json={"product_id": "prod-aviator"}, headers=customer)

        response = client.delete("/wishlist", headers=customer)

        assert response.json()["product_count"] == 0

    def test_check_product(self, client, customer):
        client.post("/wishlist", json={"product_id": "prod-aviator"}, headers=customer)

        saved = client.get("/wishlist/check/prod-aviator", headers=customer)
        other = client.get("/wishlist/check/prod-reader", headers=customer)

        assert saved.json() == {"product_id": "prod-aviator", "in_wishlist": True}
        assert other.json() == {"product_id": "prod-reader", "in_wishlist": False}

    def test_check_without_a_wishlist(self, client, other_customer):
        response = client.get("/wishlist/check/prod-aviator", headers=other_customer)
        assert response.status_code == 200
        assert response.json()["in_wishlist"] is False
