"""Integration tests for the /products and /categories endpoints."""


def _admin(create_user, auth_headers):
    admin_id = create_user(name="Admin", email="admin@example.com", role="admin")
    return auth_headers(admin_id)


class TestProductBrowsing:
    def test_keyword_search_is_case_insensitive(self, client, create_category, create_product):
        category_id = create_category()
        create_product(name="Wireless Mouse", category_id=category_id)
        create_product(name="Mechanical Keyboard", description="Loud keys", category_id=category_id)

        response = client.get("/products?keyword=MOUSE")

        assert response.status_code == 200
        data = response.json()
        assert [p["name"] for p in data["products"]] == ["Wireless Mouse"]
        assert data["totalProducts"] == 1

    def test_price_range_and_sort(self, client, create_category, create_product):
        category_id = create_category()
        for name, price in [("Cheap", 5.0), ("Middle", 50.0), ("Pricey", 500.0)]:
            create_product(name=name, price=price, category_id=category_id)

        response = client.get("/products?minPrice=10&sortBy=price&sortOrder=asc")

        assert [p["name"] for p in response.json()["products"]] == ["Middle", "Pricey"]

    def test_filter_by_category(self, client, create_category, create_product):
        audio = create_category(name="Audio")
        video = create_category(name="Video")
        create_product(name="Speaker", category_id=audio)
        create_product(name="Camera", category_id=video)

        response = client.get(f"/products?category={audio}")

        products = response.json()["products"]
        assert [p["name"] for p in products] == ["Speaker"]
        assert products[0]["category"] == {"id": audio, "name": "Audio"}

    def test_pagination(self, client, create_category, create_product):
        category_id = create_category()
        for i in range(5):
            create_product(name=f"Product {i}", category_id=category_id)

        response = client.get("/products?page=3&pageSize=2")

        data = response.json()
        assert len(data["products"]) == 1
        assert data["page"] == 3
        assert data["pages"] == 3
        assert data["totalProducts"] == 5

    def test_featured(self, client, create_category, create_product):
        category_id = create_category()
        create_product(name="Plain", category_id=category_id)
        create_product(name="Spotlight", is_featured=True, category_id=category_id)

        response = client.get("/products/featured")

        assert [p["name"] for p in response.json()] == ["Spotlight"]

    def test_detail(self, client, create_category, create_product):
        category_id = create_category(name="Peripherals")
        product_id = create_product(category_id=category_id)

        response = client.get(f"/products/{product_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["stock"] == 10
        assert data["numReviews"] == 0
        assert data["category"]["name"] == "Peripherals"

    def test_unknown_product(self, client):
        response = client.get("/products/missing")
        assert response.status_code == 404
        assert response.json() == {"message": "Product not found"}


class TestProductAdministration:
    def test_create(self, client, create_user, auth_headers, create_category):
        headers = _admin(create_user, auth_headers)
        category_id = create_category()

        response = client.post(
            "/products",
            json={
                "name": "Headphones",
                "description": "Over-ear",
                "price": 99.5,
                "image": "/images/headphones.jpg",
                "category": category_id,
                "stock": 4,
                "features": ["Bluetooth"],
                "specifications": {"weight": "250g"},
                "isFeatured": True,
            },
            headers=headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["stock"] == 4
        assert data["features"] == ["Bluetooth"]
        assert data["specifications"] == {"weight": "250g"}
        assert data["isFeatured"] is True

    def test_create_requires_admin(self, client, create_user, auth_headers, create_category):
        headers = auth_headers(create_user())
        response = client.post(
            "/products",
            json={"name": "X", "description": "Y", "price": 1, "image": "/x.jpg", "category": create_category()},
            headers=headers,
        )
        assert response.status_code == 403

    def test_update_ignores_stock(self, client, create_user, auth_headers, create_product):
        headers = _admin(create_user, auth_headers)
        product_id = create_product(stock=3)

        response = client.put(f"/products/{product_id}", json={"price": 19.99, "stock": 999}, headers=headers)

        assert response.status_code == 200
        assert response.json()["price"] == 19.99
        assert response.json()["stock"] == 3

    def test_restock(self, client, create_user, auth_headers, create_product):
        headers = _admin(create_user, auth_headers)
        product_id = create_product(stock=3)

        response = client.put(f"/products/{product_id}/stock", json={"quantity": 7}, headers=headers)

        assert response.status_code == 200
        assert response.json() == {"id": product_id, "stock": 10}

    def test_restock_rejects_zero(self, client, create_user, auth_headers, create_product):
        headers = _admin(create_user, auth_headers)
        product_id = create_product(stock=3)

        response = client.put(f"/products/{product_id}/stock", json={"quantity": 0}, headers=headers)

        assert response.status_code == 400

    def test_delete(self, client, create_user, auth_headers, create_product):
        headers = _admin(create_user, auth_headers)
        product_id = create_product()

        response = client.delete(f"/products/{product_id}", headers=headers)

        assert response.json() == {"message": "Product removed"}
        assert client.get(f"/products/{product_id}").status_code == 404


class TestReviewEndpoints:
    def test_add_review(self, client, create_user, auth_headers, create_product):
        product_id = create_product()
        headers = auth_headers(create_user(name="Ann", email="ann@example.com"))

        response = client.post(f"/products/{product_id}/reviews", json={"rating": 4, "comment": "Nice"}, headers=headers)

        assert response.status_code == 201
        assert response.json() == {"message": "Review added"}

        data = client.get(f"/products/{product_id}").json()
        assert data["numReviews"] == 1
        assert data["rating"] == 4.0
        assert data["reviews"][0]["name"] == "Ann"

    def test_second_review_rejected(self, client, create_user, auth_headers, create_product):
        product_id = create_product()
        headers = auth_headers(create_user())
        client.post(f"/products/{product_id}/reviews", json={"rating": 4, "comment": "Nice"}, headers=headers)

        response = client.post(f"/products/{product_id}/reviews", json={"rating": 1, "comment": "Bad"}, headers=headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Product already reviewed"}

    def test_review_requires_login(self, client, create_product):
        product_id = create_product()
        response = client.post(f"/products/{product_id}/reviews", json={"rating": 4, "comment": "Nice"})
        assert response.status_code == 401


class TestCategoryEndpoints:
    def test_list_only_active(self, client, create_user, auth_headers, create_category):
        headers = _admin(create_user, auth_headers)
        create_category(name="Books")
        hidden_id = create_category(name="Hidden")
        client.put(f"/categories/{hidden_id}", json={"isActive": False}, headers=headers)

        response = client.get("/categories")

        assert [c["name"] for c in response.json()] == ["Books"]

    def test_create_duplicate(self, client, create_user, auth_headers):
        headers = _admin(create_user, auth_headers)
        client.post("/categories", json={"name": "Books"}, headers=headers)

        response = client.post("/categories", json={"name": "Books"}, headers=headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Category already exists"}

    def test_products_in_category(self, client, create_category, create_product):
        category_id = create_category(name="Books")
        create_product(name="Novel", category_id=category_id)

        response = client.get(f"/categories/{category_id}/products")

        data = response.json()
        assert data["totalProducts"] == 1
        assert data["products"][0]["category"]["name"] == "Books"

    def test_delete_with_products_blocked(self, client, create_user, auth_headers, create_category, create_product):
        headers = _admin(create_user, auth_headers)
        category_id = create_category(name="Books")
        create_product(name="Novel", category_id=category_id)

        response = client.delete(f"/categories/{category_id}", headers=headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Cannot delete category with 1 associated products"}

    def test_delete_empty(self, client, create_user, auth_headers, create_category):
        headers = _admin(create_user, auth_headers)
        category_id = create_category(name="Books")

        response = client.delete(f"/categories/{category_id}", headers=headers)

        assert response.json() == {"message": "Category removed"}
        assert client.get(f"/categories/{category_id}").status_code == 404
