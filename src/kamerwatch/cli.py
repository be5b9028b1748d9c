"""Command line interface for the chamber report importer."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .config import load_config
from .core.types import MeetingKind
from .runtime import create_pipeline

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import Belgian Chamber reports into a local database")
    parser.add_argument(
        "command",
        choices=["plenary", "commission", "dossiers"],
        help="Import plenary reports, committee reports or the cached dossier pages",
    )
    parser.add_argument("--config", type=Path, help="Path to an explicit configuration file")
    parser.add_argument("--limit", type=int, help="Maximum number of reports to import")
    parser.add_argument("--verbose", action="store_true", help="Log extraction details")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.getLogger("kamerwatch").setLevel(logging.DEBUG)
    config = load_config(args.config)

    resources = create_pipeline(config)
    try:
        if args.command == "dossiers":
            stored = resources.pipeline.import_dossiers()
            LOGGER.info("Imported %s dossiers", stored)
            return 0
        kind = MeetingKind(args.command)
        processed = resources.pipeline.run(kind, limit=args.limit)
        LOGGER.info("Imported %s %s reports using %s web request(s)", processed, kind.value, resources.client.request_count)
        return 0
    finally:
        resources.close()


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
