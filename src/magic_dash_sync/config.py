"""Configuration loader for the Magic Dash sync profile."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from .errors import ConfigurationError

_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

DEFAULT_LAYOUT_NAME = "Company Details"
DEFAULT_DELIMITER = ":"

ENV_API_KEY = "HUDU_API_KEY"
ENV_BASE_DOMAIN = "HUDU_BASE_DOMAIN"
ENV_LAYOUT_NAME = "HUDU_LAYOUT_NAME"

_ENV_DEFAULTS: dict[str, str] = {
    "api_key": ENV_API_KEY,
    "base_domain": ENV_BASE_DOMAIN,
    "layout_name": ENV_LAYOUT_NAME,
}


class SyncProfile(BaseModel):
    api_key: str
    base_domain: str
    layout_name: str = DEFAULT_LAYOUT_NAME
    delimiter: str = DEFAULT_DELIMITER
    page_size: int = 25
    timeout_seconds: float = 30.0
    dry_run: bool = False

    @field_validator("api_key", "base_domain", "layout_name")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        normalized = str(value or "").strip()
        if not normalized:
            raise ValueError("must be a non-empty string")
        return normalized

    @field_validator("delimiter")
    @classmethod
    def _single_char(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("delimiter must be a single character")
        return value

    @field_validator("page_size")
    @classmethod
    def _positive_page(cls, value: int) -> int:
        if value < 1:
            raise ValueError("page_size must be >= 1")
        return value

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout_seconds must be > 0")
        return value

    def redacted(self) -> dict[str, Any]:
        payload = self.model_dump()
        payload["api_key"] = "***"
        return payload


def _expand_str(value: str, env: Mapping[str, str], unresolved: list[str]) -> str | None:
    """Expand `${VAR}` / `${VAR:-default}`; None when a required variable is unset."""
    missing: list[str] = []

    def replacer(match: re.Match[str]) -> str:
        token = match.group(1)
        if ":-" in token:
            key, default = token.split(":-", 1)
            actual = str(env.get(key) or "")
            return actual if actual.strip() else default
        actual = str(env.get(token) or "")
        if not actual.strip():
            missing.append(token)
        return actual

    expanded = _VAR_PATTERN.sub(replacer, value)
    if missing:
        unresolved.extend(missing)
        return None
    return expanded


def _expand_payload(value: Any, env: Mapping[str, str], unresolved: list[str]) -> Any:
    if isinstance(value, str):
        return _expand_str(value, env, unresolved)
    if isinstance(value, list):
        return [_expand_payload(item, env, unresolved) for item in value]
    if isinstance(value, dict):
        return {str(key): _expand_payload(item, env, unresolved) for key, item in value.items()}
    return value


def load_profile_payload(
    path: Path,
    *,
    environ: Mapping[str, str] | None = None,
    unresolved: list[str] | None = None,
) -> dict[str, Any]:
    """Read the profile mapping; settings naming an unset variable come back as None."""
    env = os.environ if environ is None else environ
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"cannot read profile {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"invalid profile YAML {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"profile must be a mapping: {path}")
    section = data.get("magic_dash", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"magic_dash section must be a mapping: {path}")
    return _expand_payload(section, env, unresolved if unresolved is not None else [])


def build_profile(
    *,
    path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> SyncProfile:
    """Resolve settings: overrides, then the profile file, then environment, then defaults."""
    env = os.environ if environ is None else environ
    payload: dict[str, Any] = {}
    for key, env_name in _ENV_DEFAULTS.items():
        value = str(env.get(env_name) or "").strip()
        if value:
            payload[key] = value
    unresolved: list[str] = []
    if path is not None:
        for key, value in load_profile_payload(path, environ=env, unresolved=unresolved).items():
            if value not in (None, ""):
                payload[key] = value
    for key, value in (overrides or {}).items():
        if value not in (None, ""):
            payload[key] = value
    try:
        return SyncProfile(**payload)
    except ValidationError as exc:
        problems = ", ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        if unresolved:
            problems += f"; missing environment variables: {sorted(set(unresolved))}"
        raise ConfigurationError(f"invalid sync profile: {problems}") from exc
