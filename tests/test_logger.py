# File: tests/test_logger.py
import logging

import pytest

from site_intel.logger import configure, get_logger


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    configure()


def test_child_loggers_write_to_rotating_file(tmp_path):
    log_file = tmp_path / "logs" / "crawl.log"
    root = configure(level="DEBUG", log_file=log_file)

    get_logger("crawler").debug("Skipping %s", "https://acme.com/x.pdf")
    for handler in root.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "SiteIntel.crawler" in text
    assert "Skipping https://acme.com/x.pdf" in text


def test_reconfigure_replaces_handlers():
    configure(level="INFO")
    root = configure(level="WARNING")
    assert len(root.handlers) == 1
    assert root.level == logging.WARNING
    assert not get_logger("renderer").isEnabledFor(logging.INFO)
    assert logging.getLogger("aiohttp.client").level == logging.WARNING
