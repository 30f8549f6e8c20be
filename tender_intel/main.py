"""Tender intelligence entry point.

Usage:
    python -m tender_intel.main --once [--days N] [--min-score S] [--analytics]
    python -m tender_intel.main --frameworks
    python -m tender_intel.main --digest
    python -m tender_intel.main              # daily digest scheduler
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from .analytics import compute_analytics
from .config import Config, load_config
from .digest import run_digest_job, start_digest_cron
from .frameworks import get_framework_intelligence
from .pipeline import filter_min_score, run_collection
from .scorer import load_profile

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tender_intel",
        description="UK electricity-supply tender collection, scoring and digest.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--once", action="store_true", help="run one collection and print the result as JSON")
    mode.add_argument("--digest", action="store_true", help="run one digest job (collect, score, email)")
    mode.add_argument("--frameworks", action="store_true", help="print framework intelligence as JSON")
    parser.add_argument("--days", type=int, default=None, help="lookback window in days (clamped to 1-30)")
    parser.add_argument("--min-score", type=float, default=0, help="only return tenders scoring at least this")
    parser.add_argument("--analytics", action="store_true", help="include analytics in --once output")
    return parser.parse_args(argv)


async def run_once(config: Config, days: Optional[int], min_score: float, analytics: bool) -> dict:
    """One collection pass rendered as the JSON contract.

    Analytics always cover the full scored batch; min_score only trims the
    returned tenders.
    """
    profile = load_profile(config.scoring_profile_path)
    result = await run_collection(days=days, config=config, profile=profile)
    view = result.model_copy(update={"tenders": filter_min_score(result.tenders, min_score)})
    output = view.model_dump(mode="json", by_alias=True)
    if analytics:
        output["analytics"] = compute_analytics(result.tenders, profile=profile).model_dump(mode="json", by_alias=True)
    return output


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = load_config()
    logging.getLogger().setLevel(config.log_level)

    if args.once:
        output = asyncio.run(run_once(config, args.days, args.min_score, args.analytics))
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return 0

    if args.frameworks:
        intelligence = asyncio.run(get_framework_intelligence())
        print(json.dumps(intelligence.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
        return 0

    if args.digest:
        run_digest_job(config)
        return 0

    logger.info("Initializing Tender Intelligence digest scheduler")
    start_digest_cron(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
