"""Magic Dash sync error taxonomy."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Fatal run precondition failure (settings or layout resolution)."""


class HuduClientError(RuntimeError):
    """Stable error surfaced by the Hudu REST client as a reason code."""

    def __init__(self, code: str, detail: str | None = None) -> None:
        self.code = code
        self.detail = detail
        message = f"{code}:{detail}" if detail else code
        super().__init__(message)


class AssetContractError(ValueError):
    """Raised when an asset payload cannot be read as an asset."""
