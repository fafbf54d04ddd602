import json
import logging

import pytest
import structlog

from anvil_harness.utils.logs import configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()


def test_json_events_are_written_to_log_file(tmp_path):
    log_file = tmp_path.joinpath("logs", "anvil.log")
    configure_logging("DEBUG", log_file=log_file, log_json=True)

    structlog.get_logger("anvil_harness.test").info("Starting anvil node", pid=42)

    event = json.loads(log_file.read_text().splitlines()[-1])
    assert event["event"] == "Starting anvil node"
    assert event["pid"] == 42
    assert event["level"] == "info"
    assert event["logger"] == "anvil_harness.test"


def test_events_below_level_are_dropped(tmp_path):
    log_file = tmp_path.joinpath("anvil.log")
    configure_logging("WARNING", log_file=log_file)

    structlog.get_logger("anvil_harness.test").info("Not written")
    structlog.get_logger("anvil_harness.test").warning("Written")

    contents = log_file.read_text()
    assert "Not written" not in contents
    assert "Written" in contents
