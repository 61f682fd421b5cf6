"""Tests for logging setup."""
import json
import logging

import pytest

from flow_migrate.config import Settings
from flow_migrate.observability import get_logger, setup_logging, with_step_context


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:

    def test_json_output_carries_step_context(self, capsys, restore_root_logger):
        setup_logging(Settings(_env_file=None, log_level="INFO", log_json=True))

        log = get_logger("flow_migrate.test", step="Checking path", target="/pkg")
        log.info("hello")

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["message"] == "hello"
        assert record["level"] == "INFO"
        assert record["logger"] == "flow_migrate.test"
        assert record["step"] == "Checking path"
        assert record["target"] == "/pkg"

    def test_plain_output_respects_level(self, capsys, restore_root_logger):
        setup_logging(Settings(_env_file=None, log_level="WARNING"))

        log = get_logger("flow_migrate.test")
        log.info("quiet")
        log.warning("loud")

        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "[WARNING] flow_migrate.test: loud" in err


def test_with_step_context_skips_empty_fields():
    assert with_step_context(step=None, target="/pkg", attempt=2) == {"target": "/pkg", "attempt": 2}
