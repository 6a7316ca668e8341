"""Main entry point for the happiness report.

Usage: report_happiness.py <action>

This script runs one named report using the application service and prints
the per-repository results.
"""
import asyncio
import logging
import sys
from typing import List, Optional
from happygit.application.happiness_service import HappinessService
from happygit.config import ConfigurationError, load_config
from happygit.infrastructure.github_client import GitHubAPIError, GitHubRestClient


logger = logging.getLogger(__name__)

# CLI action -> HappinessService method
ACTIONS = {
    "past-month": "since_30_days_ago",
    "past-week": "since_a_week_ago",
    "past-year": "since_a_year_ago",
    "this-year": "this_year",
    "this-month": "this_month",
}


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for the report run."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


async def run_report(service: HappinessService, action: str) -> dict:
    """Run one report and return it as plain data."""
    results = await getattr(service, ACTIONS[action])()
    return {repo: result.as_dict() for repo, result in results.items()}


async def main(argv: Optional[List[str]] = None) -> int:
    """Execute the requested report.

    Returns:
        Process exit status
    """
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("Usage: report_happiness.py <action>", file=sys.stderr)
        return 2

    action = argv[0]
    if action not in ACTIONS:
        print(f"Unknown action: {action}")
        return 0

    try:
        config = load_config()
    except ConfigurationError as e:
        setup_logging()
        logger.error(str(e))
        return 1

    setup_logging(config.log_level)
    service = HappinessService(GitHubRestClient(config), config)

    try:
        report = await run_report(service, action)
    except GitHubAPIError as e:
        logger.error(f"Report failed: {e}", exc_info=True)
        return 1
    finally:
        await service.close()

    print(report)
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
