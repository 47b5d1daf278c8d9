"""CLI entrypoint for the Magic Dash service-status sync."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .client import HuduClient
from .config import build_profile
from .errors import ConfigurationError, HuduClientError
from .logging_utils import configure_logging
from .runner import StatusSyncRunner

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PUBLISH_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_SOURCE_ERROR = 3


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sync asset service status fields into Hudu Magic Dash")
    parser.add_argument("--profile", default=None, help="Sync profile YAML path")
    parser.add_argument("--api-key", default=None, help="Hudu API key (defaults to HUDU_API_KEY)")
    parser.add_argument("--base-domain", default=None, help="Hudu base domain (defaults to HUDU_BASE_DOMAIN)")
    parser.add_argument("--layout-name", default=None, help="Asset layout name (default 'Company Details')")
    parser.add_argument("--delimiter", default=None, help="Field label delimiter (default ':')")
    parser.add_argument("--dry-run", action="store_true", help="Build updates without publishing")
    parser.add_argument("--summary-out", default=None, help="Write the run summary JSON to this path")
    parser.add_argument("--log-file", action="append", default=None, help="Additional log file path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_paths=args.log_file)

    overrides = {
        "api_key": args.api_key,
        "base_domain": args.base_domain,
        "layout_name": args.layout_name,
        "delimiter": args.delimiter,
        "dry_run": True if args.dry_run else None,
    }
    try:
        profile = build_profile(
            path=Path(args.profile) if args.profile else None,
            overrides=overrides,
        )
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIG_ERROR
    logger.debug("Resolved profile %s", profile.redacted())

    client = HuduClient(
        base_domain=profile.base_domain,
        api_key=profile.api_key,
        timeout_seconds=profile.timeout_seconds,
        page_size=profile.page_size,
    )
    runner = StatusSyncRunner(client=client, profile=profile)
    try:
        metrics = runner.run()
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIG_ERROR
    except HuduClientError as exc:
        logger.error("Hudu request failed: %s", exc)
        return EXIT_SOURCE_ERROR

    if args.summary_out:
        metrics.write_summary(Path(args.summary_out))
    print(json.dumps(metrics.export(), sort_keys=True, default=str))
    return EXIT_PUBLISH_FAILED if metrics.has_publish_failures else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
