"""Single-pass sync: resolve layout, decode assets, publish service status."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Iterator, Protocol

from .aggregator import build_update, group_services
from .config import SyncProfile
from .contracts import Asset, DashboardUpdate, Layout, MissingEnabledField
from .decoder import decode_fields
from .errors import AssetContractError
from .observability import SyncRunMetrics
from .publish import DashboardPublisher, PublishOutcome
from .resolver import resolve_layout_id

logger = logging.getLogger(__name__)


class HuduSource(Protocol):
    def get_asset_layouts(self, name: str) -> list[Layout]: ...

    def iter_asset_payloads(self, layout_id: int | str) -> Iterator[dict[str, Any]]: ...

    def upsert_magic_dash(self, update: DashboardUpdate) -> dict[str, Any]: ...


@dataclass
class StatusSyncRunner:
    client: HuduSource
    profile: SyncProfile

    def run(self) -> SyncRunMetrics:
        metrics = SyncRunMetrics(layout_name=self.profile.layout_name)
        layout_id = resolve_layout_id(self.client, self.profile.layout_name)
        metrics.layout_id = layout_id
        publisher = DashboardPublisher(sink=self.client, dry_run=self.profile.dry_run)

        for payload in self.client.iter_asset_payloads(layout_id):
            metrics.record_asset()
            try:
                asset = Asset.from_payload(payload)
            except AssetContractError as exc:
                asset_id = payload.get("id") if isinstance(payload, dict) else None
                logger.warning("Skipping asset id=%r: %s", asset_id, exc)
                metrics.record_asset_skipped(asset_id=asset_id, reason=str(exc))
                continue
            for outcome in self.sync_asset(asset, publisher, metrics):
                metrics.record_publish(outcome)

        summary = metrics.counters
        logger.info(
            "Sync finished layout=%r assets=%s published=%s failed=%s missing_enabled=%s skipped_fields=%s",
            self.profile.layout_name,
            summary["assets_seen"],
            summary["published"],
            summary["publish_failed"],
            summary["missing_enabled"],
            summary["fields_skipped"],
        )
        return metrics

    def sync_asset(
        self,
        asset: Asset,
        publisher: DashboardPublisher,
        metrics: SyncRunMetrics,
    ) -> list[PublishOutcome]:
        decoded = decode_fields(asset, self.profile.delimiter)
        metrics.record_decoded(len(decoded.fields))
        for skipped in decoded.skipped:
            metrics.record_skipped_field(skipped)

        groups = group_services(decoded.fields)
        metrics.record_services(
            len(groups),
            duplicates=sum(len(group.duplicates) for group in groups.values()),
        )
        outcomes: list[PublishOutcome] = []
        for group in groups.values():
            result = build_update(asset.company_name, group)
            if isinstance(result, MissingEnabledField):
                metrics.record_missing_enabled(result)
                continue
            metrics.record_update_built()
            outcomes.append(publisher.publish(result))
        return outcomes
