"""
Tests for the REST field and value routes
"""


def create_field(client, name, **extra):
    response = client.post("/api/v1/fields", json={"name": name, **extra})
    assert response.status_code == 201
    return response.json()


class TestFieldRoutes:
    """Test /api/v1/fields"""

    def test_create_and_get(self, client):
        created = create_field(client, "bio", description="About", rank=2)

        response = client.get(f"/api/v1/fields/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "name": "bio", "description": "About", "rank": 2}

    def test_create_duplicate(self, client):
        create_field(client, "bio")

        response = client.post("/api/v1/fields", json={"name": "bio"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["error_code"] == "VALIDATION_FAILED"
        assert error["message"] == 'A field with the name "bio" already exists.'
        assert error["details"] == {"field": "name"}

    def test_create_empty_name(self, client):
        response = client.post("/api/v1/fields", json={"name": " "})
        assert response.status_code == 400

    def test_create_missing_name(self, client):
        response = client.post("/api/v1/fields", json={})

        assert response.status_code == 422
        assert response.json()["error"]["error_code"] == "VALIDATION_FAILED"

    def test_get_missing(self, client):
        response = client.get("/api/v1/fields/999")

        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "RESOURCE_NOT_FOUND"

    def test_list(self, client):
        create_field(client, "twitter", rank=2)
        create_field(client, "bio", rank=1)

        response = client.get("/api/v1/fields")

        assert [field["name"] for field in response.json()] == ["bio", "twitter"]

    def test_update(self, client):
        created = create_field(client, "bio")

        response = client.put(f"/api/v1/fields/{created['id']}", json={"name": "about", "rank": 4})

        assert response.status_code == 200
        assert response.json()["name"] == "about"
        assert response.json()["rank"] == 4

    def test_update_to_taken_name(self, client):
        create_field(client, "bio")
        other = create_field(client, "website")

        response = client.put(f"/api/v1/fields/{other['id']}", json={"name": "bio"})

        assert response.status_code == 400
        assert client.get(f"/api/v1/fields/{other['id']}").json()["name"] == "website"

    def test_delete(self, client):
        created = create_field(client, "bio")

        assert client.delete(f"/api/v1/fields/{created['id']}").status_code == 204
        assert client.get(f"/api/v1/fields/{created['id']}").status_code == 404
        assert client.delete(f"/api/v1/fields/{created['id']}").status_code == 404


class TestValueRoutes:
    """Test the value endpoints"""

    def test_bio_for_resource_42(self, client):
        field = create_field(client, "bio")
        url = f"/api/v1/fields/{field['id']}/values/42"

        assert client.get(url).json()["value"] == ""

        response = client.put(url, json={"value": "hello"})
        assert response.status_code == 200
        assert client.get(url).json() == {"field_id": field["id"], "resource_id": 42, "value": "hello"}

        client.put(url, json={"value": "updated"})
        assert client.get(url).json()["value"] == "updated"
        assert client.get("/api/v1/resources/42/values").json() == {"bio": "updated"}

        assert client.delete(url).status_code == 204
        assert client.get(url).json()["value"] == ""
        assert client.delete(url).status_code == 404

    def test_set_value_for_unknown_field(self, client):
        response = client.put("/api/v1/fields/999/values/42", json={"value": "hello"})
        assert response.status_code == 404

    def test_values_after_field_delete(self, client):
        field = create_field(client, "bio")
        client.put(f"/api/v1/fields/{field['id']}/values/42", json={"value": "hello"})

        client.delete(f"/api/v1/fields/{field['id']}")

        assert client.get(f"/api/v1/fields/{field['id']}/values/42").json()["value"] == ""
        assert client.get("/api/v1/resources/42/values").json() == {}


class TestDiagnosticsRoute:
    """Test GET /api/v1/diagnostics"""

    def test_diagnostics(self, client):
        response = client.get("/api/v1/diagnostics")

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert len(body["log"]) == 15
