import logging

import pytest

from zandoli.logger import init_logger


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", logging.DEBUG),
        ("info", logging.INFO),
        ("", logging.INFO),
        ("warn", logging.WARNING),
        ("error", logging.ERROR),
        ("fatal", logging.CRITICAL),
        ("bogus", logging.INFO),
    ],
)
def test_level_mapping(name, expected):
    logger = init_logger(name, "")
    assert logger.level == expected


def test_writes_to_log_file(tmp_path):
    path = tmp_path / "run.log"
    logger = init_logger("debug", str(path))
    logger.debug("hello from test")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from test" in path.read_text(encoding="utf-8")


def test_reinit_does_not_duplicate_handlers(tmp_path):
    init_logger("info", str(tmp_path / "a.log"))
    logger = init_logger("info", "")
    assert len(logger.handlers) == 1


def test_unwritable_log_file_falls_back(tmp_path, capsys):
    logger = init_logger("info", str(tmp_path / "missing_dir" / "x.log"))
    assert len(logger.handlers) == 1
    assert "falling back to console only" in capsys.readouterr().out