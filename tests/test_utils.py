"""Tests for realm.realmcore.utils (logging setup and secret masking)."""
import logging

import pytest

from realm.realmcore import utils
from realm.realmcore.constants import PASSWORD_MASK


class TestEnvLogLevel:
    def test_default_is_info(self, monkeypatch):
        monkeypatch.delenv("REALM_LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert utils.env_log_level() == logging.INFO

    def test_generic_variable(self, monkeypatch):
        monkeypatch.delenv("REALM_LOG_LEVEL", raising=False)
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert utils.env_log_level() == logging.DEBUG

    def test_realm_variable_wins(self, monkeypatch):
        monkeypatch.setenv("REALM_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert utils.env_log_level() == logging.ERROR

    @pytest.mark.parametrize("bogus", ["loud", "Level 5", "  "])
    def test_unknown_name_falls_through(self, monkeypatch, bogus):
        monkeypatch.setenv("REALM_LOG_LEVEL", bogus)
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert utils.env_log_level() == logging.WARNING


class TestGetLogger:
    def test_children_share_namespace(self):
        assert utils.get_logger("scanner").name == "realm.scanner"
        assert utils.get_logger().name == "realm"
        assert utils.get_logger("scanner").parent is utils.get_logger()

    def test_single_handler_no_propagation(self):
        utils.get_logger("a")
        utils.get_logger("b")
        app_logger = logging.getLogger("realm")
        assert app_logger.propagate is False
        assert app_logger.handlers.count(utils._stderr_handler()) == 1

    def test_set_debug(self):
        app_logger = utils.get_logger()
        handler = utils._stderr_handler()
        level, formatter = app_logger.level, handler.formatter
        try:
            utils.set_debug()
            assert app_logger.level == logging.DEBUG
            assert "%(lineno)d" in handler.formatter._fmt
        finally:
            app_logger.setLevel(level)
            handler.setFormatter(formatter)


class TestMask:
    def test_unset(self):
        assert utils.mask(None) == "<unset>"

    @pytest.mark.parametrize("secret", ["s3cr3t", ""])
    def test_hides_value(self, secret):
        assert utils.mask(secret) == PASSWORD_MASK
