import logging
from unittest.mock import patch

from mcp_backlog.utils.logging import log_config_param, mask_sensitive, setup_logging


def test_setup_logging_default_level():
    """Test setup_logging with default WARNING level"""
    logger = setup_logging()

    assert logger.level == logging.WARNING

    root_logger = logging.getLogger()
    assert root_logger.level == logging.WARNING

    assert len(root_logger.handlers) == 1
    handler = root_logger.handlers[0]
    assert isinstance(handler, logging.Handler)
    assert handler.formatter._fmt == "%(levelname)s - %(name)s - %(message)s"


def test_setup_logging_custom_level():
    """Test setup_logging with custom DEBUG level"""
    logger = setup_logging(logging.DEBUG)

    assert logger.level == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("mcp.server.lowlevel.server").level == logging.DEBUG


def test_setup_logging_removes_existing_handlers():
    """Test that setup_logging removes existing handlers"""
    root_logger = logging.getLogger()
    test_handler = logging.StreamHandler()
    root_logger.addHandler(test_handler)

    setup_logging()

    assert len(root_logger.handlers) == 1
    assert test_handler not in root_logger.handlers


def test_setup_logging_logger_name():
    logger = setup_logging()
    assert logger.name == "mcp-backlog"


class TestMaskSensitive:
    def test_none_value(self):
        assert mask_sensitive(None) == "Not Provided"
        assert mask_sensitive("") == "Not Provided"

    def test_short_value(self):
        assert mask_sensitive("abc") == "***"
        assert mask_sensitive("abcdefgh", keep_chars=4) == "********"

    def test_api_key(self):
        assert mask_sensitive("abcdefghijklmnop") == "abcd********mnop"
        assert mask_sensitive("abcdefghijkl", keep_chars=2) == "ab********kl"


class TestLogConfigParam:
    @patch("mcp_backlog.utils.logging.logging.Logger")
    def test_normal_param(self, mock_logger):
        log_config_param(
            mock_logger, "Backlog", "URL", "https://example.backlog.com/api/v2/"
        )
        mock_logger.info.assert_called_once_with(
            "Backlog URL: https://example.backlog.com/api/v2/"
        )

    @patch("mcp_backlog.utils.logging.logging.Logger")
    def test_none_param(self, mock_logger):
        log_config_param(mock_logger, "Backlog", "HTTPS proxy", None)
        mock_logger.info.assert_called_once_with("Backlog HTTPS proxy: Not Provided")

    @patch("mcp_backlog.utils.logging.logging.Logger")
    def test_sensitive_param(self, mock_logger):
        log_config_param(
            mock_logger, "Backlog", "API key", "abcdefghijklmnop", sensitive=True
        )
        mock_logger.info.assert_called_once_with("Backlog API key: abcd********mnop")
