from __future__ import annotations

import json
import logging

from scraping.utils.logging import JsonFormatter, configure_logging, job_logger


def test_json_formatter_merges_extra_fields():
    record = logging.LogRecord("scraping.job", logging.INFO, __file__, 1, "scrape.start", None, None)
    record.job_id = "job-1"
    record.source = "조선일보"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["event"] == "scrape.start"
    assert payload["level"] == "INFO"
    assert payload["job_id"] == "job-1"
    assert payload["source"] == "조선일보"
    assert "msg" not in payload and "args" not in payload


def test_job_logger_merges_call_extra(caplog):
    log = job_logger("job-9", "예제일보", logging.getLogger("tests.joblog"))

    with caplog.at_level(logging.INFO, logger="tests.joblog"):
        log.info("scrape.links", extra={"links": 4})

    record = caplog.records[-1]
    assert record.job_id == "job-9"
    assert record.source == "예제일보"
    assert record.links == 4


def test_configure_logging_replaces_handlers():
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        configure_logging("DEBUG", json_enabled=True)
        configure_logging("WARNING", json_enabled=True)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.WARNING
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved[0]:
            root.addHandler(handler)
        root.setLevel(saved[1])
