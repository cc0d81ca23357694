"""
Tests for the connector route

Action validation, dispatch to processors and the catch-all error envelope.
"""

from extrafields.processors import Processor, ProcessorRegistry
from extrafields.routes.connector import get_processor_registry


class BrokenProcessor(Processor):
    def __init__(self, host, properties=None):
        raise RuntimeError("processor could not start")

    async def process(self):
        raise NotImplementedError


class TestActionValidation:
    """Test action checks before dispatch"""

    def test_missing_action(self, client):
        response = client.get("/connector")

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_ACTION"

    def test_path_traversal_action(self, client):
        response = client.get("/connector", params={"action": "../../etc/passwd"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "INVALID_ACTION"

    def test_unknown_action(self, client):
        response = client.post("/connector", json={"action": "mgr/nothing/here"})

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "PROCESSOR_NOT_FOUND"
        assert body["message"] == "Could not execute processor: mgr/nothing/here"

    def test_exception_is_caught(self, client):
        registry = ProcessorRegistry()
        registry.register("test/broken", BrokenProcessor)
        client.app.dependency_overrides[get_processor_registry] = lambda: registry

        response = client.get("/connector", params={"action": "test/broken"})

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "EXCEPTION_CAUGHT"
        assert "processor could not start" in body["message"]
        assert "test_connector.py:" in body["details"]


class TestDispatch:
    """Test the admin UI flow through the connector"""

    def test_field_and_value_flow(self, client):
        created = client.post("/connector", data={"action": "mgr/field/create", "name": "bio"}).json()
        assert created["success"] is True
        field_id = created["object"]["id"]

        stored = client.post(
            "/connector",
            json={"action": "mgr/value/set", "field_id": field_id, "resource_id": 42, "value": "hello"},
        ).json()
        assert stored["success"] is True

        value = client.get(
            "/connector",
            params={"action": "mgr/value/get", "field_id": field_id, "resource_id": 42},
        ).json()
        assert value["object"]["value"] == "hello"

        listing = client.get("/connector", params={"action": "mgr/value/getlist", "resource_id": 42}).json()
        assert listing["data"] == [{"name": "bio", "value": "hello"}]
        assert listing["total"] == 1

    def test_duplicate_create_returns_field_errors(self, client):
        client.post("/connector", json={"action": "mgr/field/create", "name": "bio"})

        response = client.post("/connector", json={"action": "mgr/field/create", "name": "bio"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["errors"] == [{"id": "name", "msg": 'A field with the name "bio" already exists.'}]

    def test_delete_field_clears_values(self, client):
        field_id = client.post("/connector", json={"action": "mgr/field/create", "name": "bio"}).json()["object"]["id"]
        client.post(
            "/connector",
            json={"action": "mgr/value/set", "field_id": field_id, "resource_id": 42, "value": "hello"},
        )

        deleted = client.post("/connector", json={"action": "mgr/field/delete", "id": field_id}).json()
        value = client.get(
            "/connector",
            params={"action": "mgr/value/get", "field_id": field_id, "resource_id": 42},
        ).json()

        assert deleted["success"] is True
        assert value["object"]["value"] == ""

    def test_delete_unknown_field(self, client):
        body = client.post("/connector", json={"action": "mgr/field/delete", "id": 999}).json()

        assert body["success"] is False
        assert body["message"] == "Field not found."

    def test_getlist(self, client):
        for name in ["a", "b"]:
            client.post("/connector", json={"action": "mgr/field/create", "name": name})

        body = client.get("/connector", params={"action": "mgr/field/getlist"}).json()

        assert body["success"] is True
        assert body["total"] == 2
        assert [row["name"] for row in body["data"]] == ["a", "b"]

    def test_diagnostics(self, client):
        body = client.get("/connector", params={"action": "mgr/diagnostics/run"}).json()

        assert body["success"] is True
        assert body["object"]["ok"] is True
        assert len(body["object"]["log"]) == 15
