"""CLI entry point for Business Match."""

import argparse
import asyncio
import csv
import logging
import sys
from pathlib import Path
from typing import Optional

from app.config import settings
from app.context import AppContext
from app.data import SAMPLE_BUSINESSES
from app.errors import PreferencesRequired, RepositoryError
from app.models import RankedBusiness

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def seed(ctx: AppContext) -> int:
    """Load the sample listings into the catalog."""
    created = [ctx.catalog.create(business) for business in SAMPLE_BUSINESSES]
    logger.info(f"Seeded {len(created)} sample businesses")
    return len(created)


async def show_top(
    ctx: AppContext,
    user_id: str,
    limit: int,
    output_path: Optional[Path] = None,
) -> list[RankedBusiness]:
    """Rank and print the best listings for a user, optionally exporting CSV."""
    logger.info(f"Ranking top {limit} businesses for user {user_id} ({settings.scorer} scorer)")
    ranked = await ctx.ranking.get_top_ranked_businesses(user_id, limit)

    if output_path:
        export_to_csv(ranked, output_path)
        logger.info(f"Results exported to {output_path}")

    print_summary(ranked)
    return ranked


def export_to_csv(results: list[RankedBusiness], output_path: Path):
    """Export ranked results to CSV file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)

        # Header
        writer.writerow([
            "Rank",
            "Name",
            "Location",
            "Industry",
            "Asking Price",
            "Annual Revenue",
            "Score",
            "Price Match",
            "Industry Fit",
            "Risk Alignment",
            "Involvement Fit",
            "Location Score",
            "Financial Health",
            "Reasoning",
        ])

        # Data rows
        for rank, r in enumerate(results, 1):
            factors = r.factors.model_dump() if r.factors else {}
            writer.writerow([
                rank,
                r.business.name,
                r.business.location,
                r.business.industry,
                r.business.asking_price,
                r.business.annual_revenue,
                r.score,
                factors.get("price_match", ""),
                factors.get("industry_fit", ""),
                factors.get("risk_alignment", ""),
                factors.get("involvement_fit", ""),
                factors.get("location_score", ""),
                factors.get("financial_health", ""),
                r.reasoning or "",
            ])


def print_summary(results: list[RankedBusiness]):
    """Print a summary of results to console."""
    print("\n" + "=" * 60)
    print("BUSINESS MATCH - RANKED LISTINGS")
    print("=" * 60)

    if not results:
        print("\nNo listings ranked. Seed the catalog or widen the preferred location.")

    for rank, r in enumerate(results, 1):
        print(f"\n#{rank} {r.business.name} ({r.score}/100)")
        print(f"   {r.business.industry} | {r.business.location}")
        print(f"   Asking ${r.business.asking_price:,} | Revenue ${r.business.annual_revenue:,}")
        if r.reasoning:
            print(f"   Why: {r.reasoning}")

    print("\n" + "=" * 60)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Business Match - rank businesses for sale against investor preferences"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("seed", help="Load sample listings into the catalog")

    top_parser = subparsers.add_parser("top", help="Show the best-ranked listings for a user")
    top_parser.add_argument("--user-id", "-u", required=True, help="User to rank for")
    top_parser.add_argument(
        "--limit", "-l",
        type=int,
        default=settings.default_ranked_limit,
        help=f"Number of listings to show (default: {settings.default_ranked_limit})",
    )
    top_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Optional CSV export path",
    )

    refresh_parser = subparsers.add_parser(
        "refresh", help="Re-score every cached listing for a user"
    )
    refresh_parser.add_argument("--user-id", "-u", required=True, help="User to refresh")

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        ctx = AppContext.build(settings)

        if args.command == "seed":
            seed(ctx)
        elif args.command == "top":
            asyncio.run(show_top(ctx, args.user_id, args.limit, args.output))
        elif args.command == "refresh":
            updated = asyncio.run(ctx.ranking.refresh_user_rankings(args.user_id))
            logger.info(f"Updated {updated} rankings")

    except PreferencesRequired as e:
        logger.error(str(e))
        sys.exit(2)
    except RepositoryError as e:
        logger.error(f"Database unavailable: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
