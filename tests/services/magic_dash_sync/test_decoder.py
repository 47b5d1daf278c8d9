from __future__ import annotations

import pytest

from magic_dash_sync.contracts import Asset, FieldValue
from magic_dash_sync.decoder import (
    SKIP_ACTION_NOT_ALLOWED,
    SKIP_EMPTY_SERVICE_NAME,
    SKIP_MISSING_DELIMITER,
    decode_fields,
    split_label,
)


def _asset(*fields: tuple[str, object], company: str = "Acme") -> Asset:
    return Asset.from_payload(
        {
            "id": 7,
            "company_name": company,
            "fields": [{"label": label, "value": value} for label, value in fields],
        }
    )


def test_split_label_uses_first_two_segments() -> None:
    assert split_label("Backup:ENABLED") == ("Backup", "ENABLED")
    assert split_label("Backup:ENABLED:extra") == ("Backup", "ENABLED")
    assert split_label("Misc") == ("Misc", None)
    assert split_label("Backup|URL", "|") == ("Backup", "URL")


def test_label_without_delimiter_is_skipped_and_rest_still_decoded() -> None:
    decoded = decode_fields(_asset(("Misc", "x"), ("Backup:ENABLED", True)))
    assert [(item.service_name, item.action) for item in decoded.fields] == [("Backup", "ENABLED")]
    assert len(decoded.skipped) == 1
    assert decoded.skipped[0].label == "Misc"
    assert decoded.skipped[0].reason == SKIP_MISSING_DELIMITER


@pytest.mark.parametrize("label", ["Backup:enabled", "Backup:STATUS", "Backup:", "Backup: ENABLED"])
def test_actions_outside_whitelist_are_skipped(label: str) -> None:
    decoded = decode_fields(_asset((label, True)))
    assert decoded.fields == ()
    assert decoded.skipped[0].reason == SKIP_ACTION_NOT_ALLOWED


def test_empty_service_name_is_skipped() -> None:
    decoded = decode_fields(_asset((":ENABLED", True)))
    assert decoded.fields == ()
    assert decoded.skipped[0].reason == SKIP_EMPTY_SERVICE_NAME


def test_decoded_order_and_duplicates_are_preserved() -> None:
    decoded = decode_fields(
        _asset(
            ("AV:NOTE", "first"),
            ("Backup:ENABLED", True),
            ("AV:NOTE", "second"),
            ("AV:ENABLED", False),
        )
    )
    assert [(item.service_name, item.action, item.value.raw) for item in decoded.fields] == [
        ("AV", "NOTE", "first"),
        ("Backup", "ENABLED", True),
        ("AV", "NOTE", "second"),
        ("AV", "ENABLED", False),
    ]


def test_field_values_are_tagged() -> None:
    assert FieldValue.from_raw(True).is_true
    assert not FieldValue.from_raw("true").is_true
    assert not FieldValue.from_raw(1).is_true
    assert FieldValue.from_raw(None).kind == "ABSENT"
    assert FieldValue.from_raw(3).text == "3"
