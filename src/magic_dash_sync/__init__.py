"""Hudu Magic Dash service-status sync."""

from .aggregator import FALLBACK_MESSAGE, ServiceGroup, build_update, group_services
from .client import HuduClient
from .config import DEFAULT_LAYOUT_NAME, SyncProfile, build_profile
from .contracts import (
    ALLOWED_ACTIONS,
    Asset,
    DashboardUpdate,
    DecodedField,
    Field,
    FieldValue,
    Layout,
    MissingEnabledField,
    SkippedField,
)
from .decoder import DecodedAsset, decode_fields, split_label
from .errors import AssetContractError, ConfigurationError, HuduClientError
from .publish import DashboardPublisher, PublishOutcome
from .resolver import resolve_layout_id
from .runner import StatusSyncRunner

__all__ = [
    "ALLOWED_ACTIONS",
    "DEFAULT_LAYOUT_NAME",
    "FALLBACK_MESSAGE",
    "Asset",
    "AssetContractError",
    "ConfigurationError",
    "DashboardPublisher",
    "DashboardUpdate",
    "DecodedAsset",
    "DecodedField",
    "Field",
    "FieldValue",
    "HuduClient",
    "HuduClientError",
    "Layout",
    "MissingEnabledField",
    "PublishOutcome",
    "ServiceGroup",
    "SkippedField",
    "StatusSyncRunner",
    "SyncProfile",
    "build_profile",
    "build_update",
    "decode_fields",
    "group_services",
    "resolve_layout_id",
    "split_label",
]
