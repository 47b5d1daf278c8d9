"""Group decoded fields per service and derive one dashboard update each.

Precedence for a service group:

* no ENABLED field: no update, a `MissingEnabledField` diagnostic instead;
* shade is `success` only for an ENABLED value that is exactly boolean true;
* message is the NOTE text when non-empty, otherwise synthesized from ENABLED,
  with `Details not available` as the last resort;
* the content link is attached only when the group has a URL field.

When several fields share an action within one group the first one in input
order wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterable

from .contracts import (
    ACTION_ENABLED,
    ACTION_NOTE,
    ACTION_URL,
    SHADE_GREY,
    SHADE_SUCCESS,
    VALUE_ABSENT,
    DashboardUpdate,
    DecodedField,
    MissingEnabledField,
)

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Details not available"


@dataclass
class ServiceGroup:
    service_name: str
    fields: dict[str, DecodedField] = field(default_factory=dict)
    duplicates: list[DecodedField] = field(default_factory=list)

    def add(self, decoded: DecodedField) -> None:
        if decoded.action in self.fields:
            self.duplicates.append(decoded)
            return
        self.fields[decoded.action] = decoded

    def get(self, action: str) -> DecodedField | None:
        return self.fields.get(action)


def group_services(decoded: Iterable[DecodedField]) -> dict[str, ServiceGroup]:
    groups: dict[str, ServiceGroup] = {}
    for item in decoded:
        group = groups.get(item.service_name)
        if group is None:
            group = ServiceGroup(service_name=item.service_name)
            groups[item.service_name] = group
        group.add(item)
    return groups


def build_update(company_name: str, group: ServiceGroup) -> DashboardUpdate | MissingEnabledField:
    service = group.service_name
    if group.duplicates:
        logger.warning(
            "Duplicate fields for service=%r company=%r actions=%s; first in input order kept",
            service,
            company_name,
            sorted({item.action for item in group.duplicates}),
        )
    enabled = group.get(ACTION_ENABLED)
    if enabled is None:
        missing = MissingEnabledField(company_name=company_name, service_name=service)
        logger.warning(missing.message)
        return missing

    is_enabled = enabled.value.is_true
    shade = SHADE_SUCCESS if is_enabled else SHADE_GREY

    note = group.get(ACTION_NOTE)
    message = note.value.text if note is not None else None
    if not message:
        message = f"Customer has {service}" if is_enabled else f"No {service}"
    if not message:
        message = FALLBACK_MESSAGE

    content_link = None
    url = group.get(ACTION_URL)
    if url is not None:
        if url.value.kind == VALUE_ABSENT:
            logger.info("URL field without value for service=%r company=%r", service, company_name)
        else:
            content_link = url.value.text if url.value.text is not None else str(url.value.raw)

    return DashboardUpdate(
        title=f"{company_name} - {service}",
        company_name=company_name,
        shade=shade,
        message=message,
        content_link=content_link,
    )
