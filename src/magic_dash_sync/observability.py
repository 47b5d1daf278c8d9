"""Run-scoped counters and diagnostics for a sync run."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any

from .contracts import MissingEnabledField, SkippedField
from .publish import PUBLISH_DRY_RUN, PUBLISH_FAILED, PUBLISH_PUBLISHED, PublishOutcome

_REQUIRED_COUNTERS: tuple[str, ...] = (
    "assets_seen",
    "assets_skipped",
    "fields_decoded",
    "fields_skipped",
    "services_seen",
    "missing_enabled",
    "duplicate_actions",
    "updates_built",
    "published",
    "publish_failed",
    "dry_run",
)


class SyncObservabilityError(ValueError):
    """Raised when run metrics inputs are invalid."""


@dataclass
class SyncRunMetrics:
    layout_name: str
    layout_id: int | str | None = None
    counters: dict[str, int] = field(default_factory=dict)
    recent_events: list[dict[str, Any]] = field(default_factory=list)
    publish_failures: list[dict[str, Any]] = field(default_factory=list)
    max_recent_events: int = 200
    started_at_utc: str = field(default_factory=lambda: _utc_now())

    def __post_init__(self) -> None:
        if self.max_recent_events <= 0:
            raise SyncObservabilityError("max_recent_events must be > 0")
        for key in _REQUIRED_COUNTERS:
            self.counters.setdefault(key, 0)

    def record_asset(self) -> None:
        self.counters["assets_seen"] += 1

    def record_asset_skipped(self, *, asset_id: Any, reason: str) -> None:
        self.counters["assets_skipped"] += 1
        self._append_event("asset_skipped", {"asset_id": asset_id, "reason": reason})

    def record_decoded(self, count: int) -> None:
        self.counters["fields_decoded"] += count

    def record_skipped_field(self, skipped: SkippedField) -> None:
        self.counters["fields_skipped"] += 1
        self._append_event(
            "field_skipped",
            {"company_name": skipped.company_name, "label": skipped.label, "reason": skipped.reason},
        )

    def record_services(self, count: int, *, duplicates: int = 0) -> None:
        self.counters["services_seen"] += count
        self.counters["duplicate_actions"] += duplicates

    def record_missing_enabled(self, missing: MissingEnabledField) -> None:
        self.counters["missing_enabled"] += 1
        self._append_event("missing_enabled", {"message": missing.message})

    def record_update_built(self) -> None:
        self.counters["updates_built"] += 1

    def record_publish(self, outcome: PublishOutcome) -> None:
        if outcome.status == PUBLISH_PUBLISHED:
            self.counters["published"] += 1
        elif outcome.status == PUBLISH_DRY_RUN:
            self.counters["dry_run"] += 1
        elif outcome.status == PUBLISH_FAILED:
            self.counters["publish_failed"] += 1
            self.publish_failures.append(outcome.as_dict())
        else:
            raise SyncObservabilityError(f"unsupported publish status: {outcome.status!r}")

    @property
    def has_publish_failures(self) -> bool:
        return self.counters["publish_failed"] > 0

    def export(self) -> dict[str, Any]:
        return {
            "layout_name": self.layout_name,
            "layout_id": self.layout_id,
            "started_at_utc": self.started_at_utc,
            "finished_at_utc": _utc_now(),
            "counters": dict(self.counters),
            "publish_failures": list(self.publish_failures),
            "recent_events": list(self.recent_events),
        }

    def write_summary(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.export(), indent=2, sort_keys=True, default=str), encoding="utf-8")
        return path

    def _append_event(self, kind: str, details: dict[str, Any]) -> None:
        self.recent_events.append({"event": kind, "ts_utc": _utc_now(), **details})
        if len(self.recent_events) > self.max_recent_events:
            del self.recent_events[: len(self.recent_events) - self.max_recent_events]


def _utc_now() -> str:
    return datetime.now(tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
