"""
Tests for the logging helpers.
"""

import json
import logging

from pydistfit.core.logging import JSONFormatter, configure_logging, get_logger


class TestJSONFormatter:
    """JSON records carry the contextual fields when present."""

    def test_fields(self):
        record = logging.LogRecord("pydistfit.x", logging.INFO, __file__, 1, "fitted %s", ("Gamma",), None)
        record.family = "Gamma"
        record.estimator = "GammaMLE"
        payload = json.loads(JSONFormatter().format(record))
        assert payload["message"] == "fitted Gamma"
        assert payload["level"] == "INFO"
        assert payload["family"] == "Gamma"
        assert payload["estimator"] == "GammaMLE"
        assert "metric" not in payload


class TestConfigureLogging:

    def test_single_handler(self):
        configure_logging(logging.DEBUG)
        root = configure_logging(logging.WARNING, json_output=True, component="tests")
        assert root.name == "pydistfit"
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        root.handlers.clear()

    def test_get_logger(self):
        logger = get_logger("pydistfit.tests", component="tests")
        assert logger.name == "pydistfit.tests"
