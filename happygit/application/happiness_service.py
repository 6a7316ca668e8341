"""Happiness service computing per-repository commit happiness averages."""
import asyncio
import logging
import time
from datetime import date
from typing import Callable, Dict, Optional
from happygit.config import HappyGitConfig
from happygit.domain.dates import adjusted_date, days_ago
from happygit.domain.github_interface import IGitHubClient
from happygit.domain.happiness import happy_scores
from happygit.domain.models import DateAdjustment, HappinessResult


logger = logging.getLogger(__name__)


class HappinessService:
    """Application service for measuring commit happiness.

    Streams commits from the GitHub client, keeps the scored ones and
    averages them. Repositories are measured concurrently, one task each.
    """

    def __init__(
        self,
        github_client: IGitHubClient,
        config: HappyGitConfig,
        today: Optional[Callable[[], date]] = None
    ):
        """Initialize happiness service.

        Args:
            github_client: GitHub API client implementation
            config: Settings naming the organisation and its repositories
            today: Clock used for relative since-dates, defaults to date.today
        """
        self._github_client = github_client
        self._config = config
        self._today = today or date.today

    @property
    def repos(self):
        """Repository names measured by the fan-out."""
        return self._config.repos

    async def happiness_since(self, repo: str, since: str) -> HappinessResult:
        """Calculate the average happiness of a repository's commits since a date.

        Args:
            repo: Repository name within the configured organisation
            since: ISO date string, inclusive lower bound

        Returns:
            HappinessResult; average is None when no commit carried a score
        """
        logger.info(f"Fetching commits for {self._config.org}/{repo} since {since}")

        commits = self._github_client.commits_since(self._config.org, repo, since)
        scores = [score async for score in happy_scores(commits)]
        result = HappinessResult.from_scores(scores, since)

        logger.info(f"{repo}: {result.count} scored commits, average {result.average}")
        return result

    async def otter_happiness_since(self, since: str) -> Dict[str, HappinessResult]:
        """Calculate happiness for every configured repository concurrently.

        The first failure propagates and cancels the remaining fetches.

        Args:
            since: ISO date string, inclusive lower bound

        Returns:
            Mapping of repository name to its HappinessResult
        """
        start_time = time.time()
        tasks = [
            asyncio.ensure_future(self.happiness_since(repo, since))
            for repo in self.repos
        ]

        try:
            results = await asyncio.gather(*tasks)
        except Exception as e:
            logger.error(f"Happiness fan-out since {since} failed: {e}")
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        duration = time.time() - start_time
        logger.info(f"Measured {len(tasks)} repositories in {duration:.2f} seconds")

        return dict(zip(self.repos, results))

    async def since_a_year_ago(self) -> Dict[str, HappinessResult]:
        """Measure every repository over the past 365 days."""
        return await self.otter_happiness_since(days_ago(365, self._today()))

    async def since_a_week_ago(self) -> Dict[str, HappinessResult]:
        """Measure every repository over the past 7 days."""
        return await self.otter_happiness_since(days_ago(7, self._today()))

    async def since_30_days_ago(self) -> Dict[str, HappinessResult]:
        """Measure every repository over the past 30 days."""
        return await self.otter_happiness_since(days_ago(30, self._today()))

    async def this_year(self) -> Dict[str, HappinessResult]:
        """Measure every repository since January 1st."""
        return await self.otter_happiness_since(
            adjusted_date(DateAdjustment.FIRST_DAY_OF_YEAR, self._today())
        )

    async def this_month(self) -> Dict[str, HappinessResult]:
        """Measure every repository since the first of the month."""
        return await self.otter_happiness_since(
            adjusted_date(DateAdjustment.FIRST_DAY_OF_MONTH, self._today())
        )

    async def close(self) -> None:
        """Close connections."""
        await self._github_client.close()
