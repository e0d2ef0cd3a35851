from __future__ import annotations

import json
import logging

from newsbundle.utils.logging import JsonFormatter, RedactingFilter, redact


def _record(msg: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("newsbundle.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_redact_masks_signature_values() -> None:
    header = 'HHMAC; key="id"; signature="abc+/="; date="2019-01-01T00:00:00Z"'
    assert redact(header) == 'HHMAC; key="id"; signature="***"; date="2019-01-01T00:00:00Z"'


def test_filter_scrubs_message_and_extras() -> None:
    record = _record(
        'sent signature="secret"',
        headers={"Authorization": 'HHMAC; key="id"; signature="xyz"; date="d"', "Accept": "application/json"},
    )

    assert RedactingFilter().filter(record) is True

    assert record.getMessage() == 'sent signature="***"'
    assert record.headers["Authorization"] == 'HHMAC; key="id"; signature="***"; date="d"'
    assert record.headers["Accept"] == "application/json"


def test_json_formatter_includes_extras() -> None:
    record = _record("Encoded", event="multipart.encoded", parts=3)
    data = json.loads(JsonFormatter().format(record))
    assert data["message"] == "Encoded"
    assert data["event"] == "multipart.encoded"
    assert data["parts"] == 3
    assert data["level"] == "INFO"
