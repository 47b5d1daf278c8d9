"""Thin Hudu REST client for layouts, assets and Magic Dash entries."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Iterator, Mapping

import requests

from .contracts import DashboardUpdate, Layout
from .errors import AssetContractError, ConfigurationError, HuduClientError

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
API_KEY_HEADER = "x-api-key"


@dataclass
class HuduClient:
    base_domain: str
    api_key: str
    timeout_seconds: float = 30.0
    page_size: int = 25
    session: requests.Session | None = None

    def __post_init__(self) -> None:
        if not str(self.api_key or "").strip():
            raise ConfigurationError("API_KEY_MISSING")
        if not str(self.base_domain or "").strip():
            raise ConfigurationError("BASE_DOMAIN_MISSING")
        self._session = self.session or requests.Session()
        self._base_url = normalize_base_url(self.base_domain)

    @property
    def base_url(self) -> str:
        return self._base_url

    def get_asset_layouts(self, name: str) -> list[Layout]:
        body = self._request("GET", "/asset_layouts", params={"name": name})
        try:
            return [Layout.from_payload(item) for item in _list_field(body, "asset_layouts")]
        except AssetContractError as exc:
            raise HuduClientError("HUDU_RESPONSE_INVALID_SHAPE", f"asset_layouts:{exc}") from exc

    def iter_asset_payloads(self, layout_id: int | str) -> Iterator[dict[str, Any]]:
        """Yield raw asset payloads page by page until a short or empty page."""
        page = 1
        while True:
            body = self._request(
                "GET",
                "/assets",
                params={"asset_layout_id": layout_id, "page": page, "page_size": self.page_size},
            )
            items = _list_field(body, "assets")
            logger.debug("Hudu assets page=%s layout_id=%s count=%s", page, layout_id, len(items))
            yield from items
            if len(items) < self.page_size:
                return
            page += 1

    def upsert_magic_dash(self, update: DashboardUpdate) -> dict[str, Any]:
        body = self._request("POST", "/magic_dash", json=update.as_payload())
        return dict(body) if isinstance(body, Mapping) else {}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}{API_PREFIX}{path}"
        headers = {API_KEY_HEADER: self.api_key, "Accept": "application/json"}
        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                timeout=self.timeout_seconds,
                **kwargs,
            )
        except requests.Timeout as exc:
            raise HuduClientError("HUDU_TIMEOUT", f"{method} {path}") from exc
        except requests.RequestException as exc:
            raise HuduClientError("HUDU_TRANSPORT_ERROR", str(exc)[:256]) from exc
        if response.status_code >= 400:
            raise HuduClientError(
                f"HUDU_HTTP_{response.status_code}",
                f"{method} {path}:{_response_text(response)}",
            )
        if response.status_code == 204 or not getattr(response, "content", b"x"):
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise HuduClientError("HUDU_RESPONSE_INVALID_JSON", f"{method} {path}") from exc


def normalize_base_url(base_domain: str) -> str:
    raw = str(base_domain or "").strip().rstrip("/")
    if raw.endswith(API_PREFIX):
        raw = raw[: -len(API_PREFIX)]
    if "://" not in raw:
        raw = f"https://{raw}"
    return raw


def _list_field(body: Any, key: str) -> list[Any]:
    if not isinstance(body, Mapping):
        raise HuduClientError("HUDU_RESPONSE_INVALID_SHAPE", key)
    items = body.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise HuduClientError("HUDU_RESPONSE_INVALID_SHAPE", key)
    return items


def _response_text(response: Any) -> str:
    value = getattr(response, "text", "")
    text = str(value or "").strip()
    return text[:256]
