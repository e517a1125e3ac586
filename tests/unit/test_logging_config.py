import json
import logging

import pytest

from wallet_explorer.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_stdlib_extras_become_json_keys(restore_root_logger, capsys):
    setup_logging("INFO", json_output=True)

    logging.getLogger("wallet_explorer.test").info(
        "token balance page fetched", extra={"provider": "alchemy", "page": 2}
    )

    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "token balance page fetched"
    assert record["provider"] == "alchemy"
    assert record["page"] == 2
    assert record["level"] == "info"


def test_level_and_noisy_loggers(restore_root_logger):
    setup_logging("DEBUG", json_output=False)

    assert restore_root_logger.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
