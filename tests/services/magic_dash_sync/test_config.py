from __future__ import annotations

from pathlib import Path

import pytest

from magic_dash_sync.config import DEFAULT_LAYOUT_NAME, build_profile
from magic_dash_sync.errors import ConfigurationError

SHIPPED_PROFILE = Path("config/magic_dash/sync_profile_v0.yaml")


def test_profile_resolves_from_environment_with_defaults() -> None:
    profile = build_profile(environ={"HUDU_API_KEY": "key", "HUDU_BASE_DOMAIN": "acme.huducloud.com"})
    assert profile.api_key == "key"
    assert profile.base_domain == "acme.huducloud.com"
    assert profile.layout_name == DEFAULT_LAYOUT_NAME
    assert profile.delimiter == ":"
    assert profile.dry_run is False
    assert profile.redacted()["api_key"] == "***"


def test_overrides_beat_profile_file_and_environment(tmp_path: Path) -> None:
    path = tmp_path / "profile.yaml"
    path.write_text(
        """
magic_dash:
  api_key: file-key
  base_domain: file.example.com
  layout_name: Service Matrix
""".strip(),
        encoding="utf-8",
    )
    profile = build_profile(
        path=path,
        overrides={"base_domain": "cli.example.com", "layout_name": None},
        environ={"HUDU_API_KEY": "env-key", "HUDU_BASE_DOMAIN": "env.example.com"},
    )
    assert profile.api_key == "file-key"
    assert profile.base_domain == "cli.example.com"
    assert profile.layout_name == "Service Matrix"


def test_shipped_profile_expands_environment() -> None:
    profile = build_profile(
        path=SHIPPED_PROFILE,
        environ={"HUDU_API_KEY": "abc", "HUDU_BASE_DOMAIN": "https://docs.example.com"},
    )
    assert profile.api_key == "abc"
    assert profile.base_domain == "https://docs.example.com"
    assert profile.layout_name == "Company Details"
    assert profile.page_size == 25


def test_profile_referencing_unset_variable_is_a_configuration_error(tmp_path: Path) -> None:
    path = tmp_path / "profile.yaml"
    path.write_text("api_key: ${HUDU_SYNC_TEST_UNSET}\nbase_domain: x\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="HUDU_SYNC_TEST_UNSET"):
        build_profile(path=path, environ={})


@pytest.mark.parametrize(
    "environ",
    [
        {},
        {"HUDU_API_KEY": "key"},
        {"HUDU_BASE_DOMAIN": "acme.example.com"},
        {"HUDU_API_KEY": "   ", "HUDU_BASE_DOMAIN": "acme.example.com"},
    ],
)
def test_missing_credentials_or_endpoint_abort(environ: dict[str, str]) -> None:
    with pytest.raises(ConfigurationError):
        build_profile(environ=environ)


def test_blank_layout_name_override_keeps_default() -> None:
    profile = build_profile(
        overrides={"layout_name": ""},
        environ={"HUDU_API_KEY": "key", "HUDU_BASE_DOMAIN": "acme.example.com"},
    )
    assert profile.layout_name == DEFAULT_LAYOUT_NAME


def test_multi_character_delimiter_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="delimiter"):
        build_profile(
            overrides={"delimiter": "::"},
            environ={"HUDU_API_KEY": "key", "HUDU_BASE_DOMAIN": "acme.example.com"},
        )


def test_overrides_satisfy_shipped_profile_without_environment() -> None:
    profile = build_profile(
        path=SHIPPED_PROFILE,
        overrides={"api_key": "cli-key", "base_domain": "cli.example.com"},
        environ={},
    )
    assert profile.api_key == "cli-key"
    assert profile.base_domain == "cli.example.com"
    assert profile.layout_name == DEFAULT_LAYOUT_NAME


def test_shipped_profile_expands_against_injected_environment_only(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HUDU_API_KEY", "process-key")
    monkeypatch.setenv("HUDU_BASE_DOMAIN", "process.example.com")
    with pytest.raises(ConfigurationError, match="HUDU_API_KEY"):
        build_profile(path=SHIPPED_PROFILE, environ={})


def test_missing_profile_file_is_a_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="cannot read profile"):
        build_profile(
            path=tmp_path / "absent.yaml",
            environ={"HUDU_API_KEY": "key", "HUDU_BASE_DOMAIN": "acme.example.com"},
        )


def test_malformed_profile_yaml_is_a_configuration_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("magic_dash:\n  api_key: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="invalid profile YAML"):
        build_profile(
            path=path,
            environ={"HUDU_API_KEY": "key", "HUDU_BASE_DOMAIN": "acme.example.com"},
        )
