"""
Tests for .env discovery
"""

import os

import pytest

from extrafields.bootstrap import candidate_paths, discover_env_file, load_environment
from extrafields.exceptions import ConfigurationError, ErrorCode


@pytest.fixture
def module_file(tmp_path):
    """A file four directories deep, so every candidate stays inside tmp_path."""
    package = tmp_path / "install" / "project" / "src" / "pkg"
    package.mkdir(parents=True)
    path = package / "module.py"
    path.write_text("")
    return path


class TestDiscovery:
    """Test discover_env_file()"""

    def test_candidate_order(self, module_file):
        pkg = module_file.parent
        assert candidate_paths(module_file) == [
            pkg.parent / ".env",
            pkg.parent.parent / ".env",
            pkg / ".env",
            pkg.parent.parent.parent / ".env",
        ]

    def test_finds_first_existing_candidate(self, module_file):
        project = module_file.parent.parent.parent
        (project / ".env").write_text("EXTRAFIELDS_TEST_VALUE=from-project\n")
        (module_file.parent / ".env").write_text("EXTRAFIELDS_TEST_VALUE=from-package\n")

        assert discover_env_file(module_file) == project / ".env"

    def test_nothing_found(self, module_file):
        assert discover_env_file(module_file) is None


class TestLoadEnvironment:
    """Test load_environment()"""

    def test_loads_variables(self, module_file, monkeypatch):
        monkeypatch.delenv("EXTRAFIELDS_TEST_VALUE", raising=False)
        (module_file.parent.parent / ".env").write_text("EXTRAFIELDS_TEST_VALUE=loaded\n")

        path = load_environment(module_file)

        assert path == module_file.parent.parent / ".env"
        assert os.environ.pop("EXTRAFIELDS_TEST_VALUE") == "loaded"

    def test_optional_when_missing(self, module_file):
        assert load_environment(module_file) is None

    def test_required_when_missing(self, module_file):
        with pytest.raises(ConfigurationError) as exc_info:
            load_environment(module_file, require=True)
        assert exc_info.value.error_code == ErrorCode.CONFIG_NOT_FOUND
