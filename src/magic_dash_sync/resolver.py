"""Resolve the configured asset layout name to a single layout id."""

from __future__ import annotations

import logging
from typing import Protocol

from .contracts import Layout
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class LayoutSource(Protocol):
    def get_asset_layouts(self, name: str) -> list[Layout]: ...


def resolve_layout_id(source: LayoutSource, name: str) -> int | str:
    layouts = list(source.get_asset_layouts(name))
    if not layouts:
        raise ConfigurationError(f"No layouts found matching name {name!r}")
    if len(layouts) > 1:
        ids = [layout.layout_id for layout in layouts]
        raise ConfigurationError(f"Multiple layouts found matching name {name!r}: ids={ids!r}")
    layout = layouts[0]
    logger.info("Resolved layout name=%r id=%s", name, layout.layout_id)
    return layout.layout_id
