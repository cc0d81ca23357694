"""
Tests for the host context
"""

import logging

from extrafields.config import Settings
from extrafields.host import Host


class TestHostOptions:
    """Test Host.get_option()"""

    def test_default(self):
        assert Host(db=None).get_option("default_rank", 3) == 3

    def test_request_option(self):
        host = Host(db=None, options={"extrafields.default_rank": 5})
        assert host.get_option("default_rank", 0) == 5

    def test_request_option_wins_over_settings(self):
        config = Settings(options={"extrafields_default_rank": 10})
        host = Host(db=None, config=config, options={"extrafields.default_rank": 5})
        assert host.get_option("default_rank", 0) == 5

    def test_settings_option_used_without_request_option(self):
        config = Settings(options={"extrafields_default_rank": 10})
        host = Host(db=None, config=config, options={"extrafields.other": 1})
        assert host.get_option("default_rank", 0) == 10


class TestHostPermissions:
    """Test Host.has_permission()"""

    def test_all_permissions_by_default(self):
        assert Host(db=None).has_permission("extrafields.delete")

    def test_explicit_permissions(self):
        host = Host(db=None, permissions={"extrafields.view"})
        assert host.has_permission("extrafields.view")
        assert not host.has_permission("extrafields.delete")


class TestHostLogging:
    """Test Host.log() and Host.lexicon()"""

    def test_log_with_string_level(self, caplog):
        with caplog.at_level(logging.WARNING, logger="extrafields.host"):
            Host(db=None).log("warning", "something happened", "FieldCreateProcessor.run")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.context == "FieldCreateProcessor.run"

    def test_lexicon_language(self):
        assert Host(db=None, language="fr").lexicon("access_denied") == "Accès refusé."
