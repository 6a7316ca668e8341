"""GitHub API interface (port) for fetching commit history.

The happiness service talks to GitHub only through this port, so tests can
swap in an in-memory commit source.
"""
from abc import ABC, abstractmethod
from typing import AsyncIterator, Optional
from happygit.domain.models import CommitPage


class IGitHubClient(ABC):
    """Abstract interface for GitHub API operations."""

    @abstractmethod
    async def query_page(self, url: str, params: Optional[dict] = None) -> CommitPage:
        """Fetch a single page of results.

        Args:
            url: Absolute API URL
            params: Extra query parameters for the request

        Returns:
            The decoded records and the link to the next page, if any
        """
        pass

    @abstractmethod
    def paginate(self, url: str, params: Optional[dict] = None) -> AsyncIterator[dict]:
        """Stream every record of a paginated query, fetching pages on demand."""
        pass

    @abstractmethod
    def commits_since(self, org: str, repo: str, since: str) -> AsyncIterator[dict]:
        """Stream the commits of org/repo made on or after the since-date."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
