import logging

from triglav_consumer.logging import LogfmtFormatter, redact, setup_logging


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="triglav_consumer.client",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, val in extra.items():
        setattr(record, key, val)
    return record


def test_logfmt_includes_known_extras():
    line = LogfmtFormatter().format(
        _record("auth.retry", operation="get_job", attempt=1, unrelated="x")
    )

    assert line == (
        "level=info logger=triglav_consumer.client event=auth.retry "
        "operation=get_job attempt=1"
    )


def test_logfmt_quotes_values_with_spaces():
    line = LogfmtFormatter().format(_record("op.request", url="/a b"))
    assert 'url="/a b"' in line


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG", logger_name="triglav_consumer.test")
    setup_logging("DEBUG", logger_name="triglav_consumer.test")

    target = logging.getLogger("triglav_consumer.test")
    assert len(target.handlers) == 1
    assert isinstance(target.handlers[0].formatter, LogfmtFormatter)
    assert target.level == logging.DEBUG


def test_logfmt_masks_credentials_in_message_and_extras():
    line = LogfmtFormatter().format(
        _record(
            'auth.failed body={"access_token": "tok-123"} header Authorization: tok-123',
            url="/api/v1/jobs?password=hunter2",
        )
    )

    assert "tok-123" not in line
    assert "hunter2" not in line
    assert "Authorization: ***" in line
    assert "password=***" in line


def test_redact_leaves_ordinary_text_alone():
    assert redact("op.request url=/api/v1/jobs/42") == "op.request url=/api/v1/jobs/42"
