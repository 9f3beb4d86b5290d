#!/usr/bin/env python3
"""
Print the live option catalog (Monday.com dropdowns + Resend segments) as JSON.

Useful after editing the board's dropdown columns or the Resend segments, to
check what the intake form will offer. Exits 1 if either source failed.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional

# Add repo root to path so `src.*` imports work when running from scripts/
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.integrations.clients.real_http.monday import MondayBoardClient
from src.integrations.clients.real_http.resend import ResendClient
from src.intake.catalog import OptionCatalogResolver
from src.utils.config_loader import load_intake_config


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def run(config_path: Optional[Path]) -> int:
    cfg = load_intake_config(config_path)
    resolver = OptionCatalogResolver(
        MondayBoardClient(cfg.monday),
        ResendClient(cfg.resend),
        columns=cfg.monday.columns,
    )
    result = await resolver.fetch_all()

    out = {
        "area_of_expertise": [asdict(o) for o in result.board_options.area_of_expertise] if result.board_options else [],
        "labels": [asdict(o) for o in result.board_options.labels] if result.board_options else [],
        "segments": [asdict(s) for s in result.segments or []],
        "errors": result.errors,
    }
    print(json.dumps(out, indent=2))
    return 1 if result.errors else 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Print the intake form's option catalog")
    parser.add_argument("--config", type=Path, default=None, help="Path to intake_config.yml")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    return asyncio.run(run(args.config))


if __name__ == "__main__":
    sys.exit(main())
