"""Tests for the products endpoints."""


def names(response):
    return [p["name"] for p in response.json()]


class TestProductReads:
    """Catalog listing and brand filtering."""

    def test_brand_filter_and_unfiltered_do_not_collide(self, client, make_product, acme_admin, auth_headers):
        make_product("Acme", "Anvil")
        make_product("Globex", "Hammock")
        make_product("Acme", "Magnet")
        headers = auth_headers(acme_admin)

        filtered = client.get("/api/products?brand=Acme&page=1&limit=10", headers=headers)
        unfiltered = client.get("/api/products?page=1&limit=10", headers=headers)

        assert names(filtered) == ["Anvil", "Magnet"]
        assert names(unfiltered) == ["Anvil", "Hammock", "Magnet"]

    def test_list_view_hides_details(self, client, make_product, acme_admin, auth_headers):
        make_product("Acme", "Anvil", description="Heavy", reference="ACME-1")

        item = client.get("/api/products", headers=auth_headers(acme_admin)).json()[0]

        assert set(item) == {"id", "brand", "name"}

    def test_default_limit_is_four(self, client, make_product, acme_admin, auth_headers):
        for i in range(6):
            make_product("Acme", f"p{i}")

        assert len(client.get("/api/products", headers=auth_headers(acme_admin)).json()) == 4

    def test_empty_result_is_ok(self, client, acme_admin, auth_headers):
        response = client.get("/api/products?brand=Nobody", headers=auth_headers(acme_admin))

        assert response.status_code == 200
        assert response.json() == []

    def test_detail(self, client, make_product, make_user, acme, auth_headers):
        product = make_product("Acme", "Anvil", description="Heavy", reference="ACME-1")
        plain = make_user("plainuser", customer=acme)

        response = client.get(f"/api/products/{product.id}", headers=auth_headers(plain))

        assert response.status_code == 200
        assert response.json()["reference"] == "ACME-1"

    def test_bad_brand(self, client, acme_admin, auth_headers):
        response = client.get("/api/products?brand=" + "x" * 201, headers=auth_headers(acme_admin))
        assert response.status_code == 400

    def test_huge_page_is_bad_request(self, client, make_product, acme_admin, auth_headers):
        make_product("Acme", "Anvil")

        response = client.get(
            "/api/products?page=10000000000000000000&limit=3", headers=auth_headers(acme_admin)
        )

        assert response.status_code == 400

    def test_huge_id_is_bad_request(self, client, acme_admin, auth_headers):
        response = client.get("/api/products/10000000000000000000", headers=auth_headers(acme_admin))
        assert response.status_code == 400

    def test_reads_fall_through_when_cache_down(self, client, make_product, acme_admin, redis_server, auth_headers):
        make_product("Acme", "Anvil")
        redis_server.connected = False

        response = client.get("/api/products", headers=auth_headers(acme_admin))

        assert response.status_code == 200
        assert names(response) == ["Anvil"]


class TestProductWrites:
    """Writes are reserved to global admins and invalidate listings."""

    def test_company_admin_cannot_write(self, client, acme_admin, auth_headers):
        response = client.post("/api/products", json={"brand": "Acme", "name": "Anvil"}, headers=auth_headers(acme_admin))
        assert response.status_code == 403

    def test_create_update_delete(self, client, global_admin, auth_headers):
        headers = auth_headers(global_admin)
        assert client.get("/api/products?brand=Acme", headers=headers).json() == []

        created = client.post(
            "/api/products",
            json={"brand": "Acme", "name": "Anvil", "description": "Heavy", "reference": "ACME-1"},
            headers=headers,
        )
        assert created.status_code == 201
        product_id = created.json()["id"]
        assert names(client.get("/api/products?brand=Acme", headers=headers)) == ["Anvil"]

        updated = client.put(f"/api/products/{product_id}", json={"brand": "Globex"}, headers=headers)
        assert updated.status_code == 204
        assert client.get("/api/products?brand=Acme", headers=headers).json() == []
        assert client.get(f"/api/products/{product_id}", headers=headers).json()["brand"] == "Globex"

        assert client.delete(f"/api/products/{product_id}", headers=headers).status_code == 204
        assert client.get(f"/api/products/{product_id}", headers=headers).status_code == 404
        assert client.get("/api/products", headers=headers).json() == []

    def test_invalid_payload(self, client, global_admin, auth_headers):
        response = client.post("/api/products", json={"brand": "", "name": "Anvil"}, headers=auth_headers(global_admin))
        assert response.status_code == 400
