"""
Tests for the application factory
"""

from fastapi.testclient import TestClient

import extrafields.main as main_module
from extrafields.config import settings


class TestCreateApp:
    """Test create_app()"""

    def test_routes_registered(self, monkeypatch):
        monkeypatch.setattr(main_module, "setup_logging", lambda *args, **kwargs: None)

        app = main_module.create_app()
        paths = {route.path for route in app.routes}

        assert "/connector" in paths
        assert "/api/v1/fields" in paths
        assert "/api/v1/fields/{field_id}/values/{resource_id}" in paths
        assert "/api/v1/diagnostics" in paths

    def test_root(self, monkeypatch):
        monkeypatch.setattr(main_module, "setup_logging", lambda *args, **kwargs: None)

        # No context manager: the lifespan (table creation) does not run
        response = TestClient(main_module.create_app()).get("/")

        assert response.status_code == 200
        assert response.json() == {"message": f"{settings.app_name} is running", "version": settings.app_version}
