"""Write the combined contributions calendar to an SVG file.

Meant to run from a scheduler, e.g.::

    python -m combined_heatmap.daily --users octocat,hubot --output combined.svg
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from combined_heatmap.core.logging import setup_logging
from combined_heatmap.services.aggregation_service import ContributionAggregator
from combined_heatmap.services.aggregation_service import GitHubAPIError
from combined_heatmap.services.aggregation_service import InvalidGitHubTokenError
from combined_heatmap.services.aggregation_service import InvalidIdentitiesError
from combined_heatmap.services.aggregation_service import parse_identities
from combined_heatmap.settings import Settings


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render the combined GitHub contributions calendar as SVG."
    )
    parser.add_argument(
        "--users",
        required=True,
        help="Comma separated GitHub logins, e.g. octocat,hubot",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("combined.svg"),
        help="Destination SVG file (default: combined.svg)",
    )
    return parser


async def write_calendar(
    aggregator: ContributionAggregator, identities: list[str], output: Path
) -> Path:
    svg = await aggregator.render_svg(identities)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(svg, encoding="utf-8")
    return output


def main(
    argv: list[str] | None = None,
    aggregator: ContributionAggregator | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    setup_logging(settings.log_level)

    try:
        identities = parse_identities(args.users, settings.max_identities)
    except InvalidIdentitiesError as exc:
        logger.error("%s", exc)
        return 2

    aggregator = aggregator or ContributionAggregator(settings)
    try:
        output = asyncio.run(write_calendar(aggregator, identities, args.output))
    except (InvalidGitHubTokenError, GitHubAPIError) as exc:
        logger.error("Could not aggregate %s: %s", ", ".join(identities), exc)
        return 1

    logger.info("SVG updated at %s", output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
