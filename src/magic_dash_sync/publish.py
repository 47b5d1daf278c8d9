"""Magic Dash upsert corridor with per-update outcomes."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Protocol

from .contracts import DashboardUpdate
from .errors import HuduClientError

logger = logging.getLogger(__name__)

PUBLISH_PUBLISHED = "PUBLISHED"
PUBLISH_FAILED = "FAILED"
PUBLISH_DRY_RUN = "DRY_RUN"


class DashboardSink(Protocol):
    def upsert_magic_dash(self, update: DashboardUpdate) -> dict[str, Any]: ...


@dataclass(frozen=True)
class PublishOutcome:
    title: str
    company_name: str
    status: str
    reason_code: str | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != PUBLISH_FAILED

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": self.title,
            "company_name": self.company_name,
            "status": self.status,
        }
        if self.reason_code:
            payload["reason_code"] = self.reason_code
        if self.detail:
            payload["detail"] = self.detail
        return payload


@dataclass
class DashboardPublisher:
    sink: DashboardSink
    dry_run: bool = False

    def publish(self, update: DashboardUpdate) -> PublishOutcome:
        if self.dry_run:
            logger.info("Dry run, not publishing payload=%s", update.as_payload())
            return PublishOutcome(title=update.title, company_name=update.company_name, status=PUBLISH_DRY_RUN)
        try:
            self.sink.upsert_magic_dash(update)
        except HuduClientError as exc:
            logger.error("Magic Dash upsert failed title=%r error=%s", update.title, exc)
            return PublishOutcome(
                title=update.title,
                company_name=update.company_name,
                status=PUBLISH_FAILED,
                reason_code=exc.code,
                detail=exc.detail,
            )
        logger.info("Published title=%r shade=%s", update.title, update.shade)
        return PublishOutcome(title=update.title, company_name=update.company_name, status=PUBLISH_PUBLISHED)
