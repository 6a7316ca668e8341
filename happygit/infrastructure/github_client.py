"""GitHub REST API client with Link-header pagination."""
import asyncio
import logging
import re
from typing import AsyncIterator, Optional
import aiohttp
from happygit.config import HappyGitConfig
from happygit.domain.github_interface import IGitHubClient
from happygit.domain.models import CommitPage


logger = logging.getLogger(__name__)

# One entry of a Link header: <https://...>; rel="next"
LINK_ENTRY_PATTERN = re.compile(r'<([^>]+)>\s*;.*?\brel="([^"]*)"')


class GitHubAPIError(Exception):
    """Raised when a page cannot be fetched or decoded."""

    def __init__(self, message: str, url: str, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


def parse_next_link(link_header: Optional[str]) -> Optional[str]:
    """Extract the URL of the ``next`` relation from a Link header.

    Args:
        link_header: Raw header value, e.g. '<https://...&page=2>; rel="next"'

    Returns:
        The next page URL, or None when there is no next page
    """
    if not link_header:
        return None
    for entry in link_header.split(","):
        match = LINK_ENTRY_PATTERN.search(entry)
        if match and "next" in match.group(2).split():
            return match.group(1)
    return None


def commits_url(api_base: str, org: str, repo: str) -> str:
    """Return the commits endpoint of org/repo."""
    return f"{api_base}/repos/{org}/{repo}/commits"


class GitHubRestClient(IGitHubClient):
    """GitHub REST API client that streams paginated results.

    Implements the IGitHubClient port. Pages are requested one at a time,
    only when the consumer has used up the records already fetched.
    """

    def __init__(self, config: HappyGitConfig):
        """Initialize GitHub client.

        Args:
            config: Validated settings carrying the token and API base URL
        """
        self._config = config
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> 'GitHubRestClient':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        """Create the HTTP session on first use (lazy initialization)."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=self._config.auth_headers)
        return self._session

    async def query_page(self, url: str, params: Optional[dict] = None) -> CommitPage:
        """Fetch one page and the link to the page after it.

        Args:
            url: Absolute API URL
            params: Extra query parameters for the request

        Returns:
            CommitPage with the decoded records and the next page URL

        Raises:
            GitHubAPIError: On transport failure, non-2xx status or a body
                that is not a JSON array
        """
        session = self._get_session()
        logger.debug(f"GET {url} params={params}")

        try:
            async with session.get(url, params=params, raise_for_status=True) as response:
                next_url = parse_next_link(response.headers.get("Link"))
                body = await response.json(content_type=None)
        except aiohttp.ClientResponseError as e:
            logger.error(f"GitHub returned {e.status} for {url}: {e.message}")
            raise GitHubAPIError(f"GitHub returned {e.status} for {url}", url, e.status) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error requesting {url}: {e!r}")
            raise GitHubAPIError(f"Request to {url} failed: {e!r}", url) from e
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            raise GitHubAPIError(f"Invalid JSON from {url}", url) from e

        if not isinstance(body, list):
            logger.error(f"Expected a JSON array from {url}, got {type(body).__name__}")
            raise GitHubAPIError(f"Expected a JSON array from {url}", url)

        return CommitPage(records=body, next_url=next_url)

    async def paginate(self, url: str, params: Optional[dict] = None) -> AsyncIterator[dict]:
        """Stream every record of a paginated query.

        Follow-up pages are requested with the next URL exactly as GitHub
        sent it. The stream is forward-only: iterating it again requires a
        new call.

        Args:
            url: Absolute API URL of the first page
            params: Query parameters for the first page only

        Yields:
            Records in the order GitHub returns them
        """
        page = await self.query_page(url, params)
        pages = 1
        records = 0

        while True:
            for record in page.records:
                records += 1
                yield record

            if page.is_last:
                break

            page = await self.query_page(page.next_url)
            pages += 1

        logger.debug(f"Finished {url}: {records} records in {pages} pages")

    def commits_since(self, org: str, repo: str, since: str) -> AsyncIterator[dict]:
        """Stream the commits of org/repo made on or after the since-date.

        Args:
            org: Organisation or user owning the repository
            repo: Repository name
            since: ISO date string, inclusive lower bound

        Returns:
            Lazy stream of commit records
        """
        params = {"since": since}
        if self._config.per_page:
            params["per_page"] = str(self._config.per_page)
        return self.paginate(commits_url(self._config.api_base, org, repo), params)

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
