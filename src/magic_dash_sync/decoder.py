"""Decode `<Service><delimiter><ACTION>` field labels on an asset."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from .config import DEFAULT_DELIMITER
from .contracts import ALLOWED_ACTIONS, Asset, DecodedField, SkippedField

logger = logging.getLogger(__name__)

SKIP_MISSING_DELIMITER = "MISSING_DELIMITER"
SKIP_ACTION_NOT_ALLOWED = "ACTION_NOT_ALLOWED"
SKIP_EMPTY_SERVICE_NAME = "EMPTY_SERVICE_NAME"


@dataclass(frozen=True)
class DecodedAsset:
    asset: Asset
    fields: tuple[DecodedField, ...]
    skipped: tuple[SkippedField, ...]


def split_label(label: str, delimiter: str = DEFAULT_DELIMITER) -> tuple[str, str | None]:
    """Return (service, action); action is None when the label has no delimiter.

    Only the first two segments count, so `A:ENABLED:extra` decodes as (A, ENABLED).
    """
    parts = label.split(delimiter)
    if len(parts) < 2:
        return parts[0], None
    return parts[0], parts[1]


def decode_fields(asset: Asset, delimiter: str = DEFAULT_DELIMITER) -> DecodedAsset:
    decoded: list[DecodedField] = []
    skipped: list[SkippedField] = []
    for field in asset.fields:
        service_name, action = split_label(field.label, delimiter)
        reason = None
        if action is None:
            reason = SKIP_MISSING_DELIMITER
        elif action not in ALLOWED_ACTIONS:
            reason = SKIP_ACTION_NOT_ALLOWED
        elif not service_name:
            reason = SKIP_EMPTY_SERVICE_NAME
        if reason is not None:
            logger.info(
                "Skipping field label=%r company=%r reason=%s",
                field.label,
                asset.company_name,
                reason,
            )
            skipped.append(SkippedField(company_name=asset.company_name, label=field.label, reason=reason))
            continue
        decoded.append(DecodedField(service_name=service_name, action=action, value=field.value))
    return DecodedAsset(asset=asset, fields=tuple(decoded), skipped=tuple(skipped))
