"""Asset, field and dashboard contracts for the Magic Dash sync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .errors import AssetContractError

VALUE_BOOLEAN = "BOOLEAN"
VALUE_STRING = "STRING"
VALUE_ABSENT = "ABSENT"

ACTION_ENABLED = "ENABLED"
ACTION_NOTE = "NOTE"
ACTION_URL = "URL"
ALLOWED_ACTIONS: tuple[str, ...] = (ACTION_ENABLED, ACTION_NOTE, ACTION_URL)

SHADE_SUCCESS = "success"
SHADE_GREY = "grey"


@dataclass(frozen=True)
class FieldValue:
    """Field value as a tagged union of boolean, string or absent."""

    kind: str
    raw: bool | str | None = None

    @classmethod
    def from_raw(cls, value: Any) -> "FieldValue":
        if value is None:
            return cls(VALUE_ABSENT)
        if isinstance(value, bool):
            return cls(VALUE_BOOLEAN, value)
        return cls(VALUE_STRING, str(value))

    @property
    def is_true(self) -> bool:
        return self.kind == VALUE_BOOLEAN and self.raw is True

    @property
    def text(self) -> str | None:
        if self.kind == VALUE_STRING:
            return str(self.raw)
        return None


@dataclass(frozen=True)
class Layout:
    layout_id: int | str
    name: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Layout":
        if not isinstance(payload, Mapping):
            raise AssetContractError("asset layout payload must be a mapping")
        layout_id = payload.get("id")
        if layout_id in (None, ""):
            raise AssetContractError("asset layout payload missing id")
        return cls(layout_id=layout_id, name=str(payload.get("name") or ""))


@dataclass(frozen=True)
class Field:
    label: str
    value: FieldValue

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Field":
        if not isinstance(payload, Mapping):
            raise AssetContractError("asset field must be a mapping")
        return cls(label=str(payload.get("label") or ""), value=FieldValue.from_raw(payload.get("value")))


@dataclass(frozen=True)
class Asset:
    company_name: str
    fields: tuple[Field, ...]
    asset_id: int | str | None = None
    name: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Asset":
        if not isinstance(payload, Mapping):
            raise AssetContractError("asset payload must be a mapping")
        company_name = str(payload.get("company_name") or "").strip()
        if not company_name:
            raise AssetContractError(f"asset {payload.get('id')!r} has no company_name")
        raw_fields = payload.get("fields")
        if raw_fields is None:
            raw_fields = []
        if not isinstance(raw_fields, list):
            raise AssetContractError(f"asset {payload.get('id')!r} fields must be a list")
        return cls(
            company_name=company_name,
            fields=tuple(Field.from_payload(item) for item in raw_fields),
            asset_id=payload.get("id"),
            name=payload.get("name"),
        )


@dataclass(frozen=True)
class DecodedField:
    service_name: str
    action: str
    value: FieldValue


@dataclass(frozen=True)
class DashboardUpdate:
    title: str
    company_name: str
    shade: str
    message: str
    content_link: str | None = None

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": self.title,
            "company_name": self.company_name,
            "shade": self.shade,
            "message": self.message,
        }
        if self.content_link is not None:
            payload["content_link"] = self.content_link
        return payload


@dataclass(frozen=True)
class SkippedField:
    company_name: str
    label: str
    reason: str


@dataclass(frozen=True)
class MissingEnabledField:
    company_name: str
    service_name: str

    @property
    def message(self) -> str:
        return f"No ENABLED field for service {self.service_name} in asset {self.company_name}"
