"""Runtime configuration loaded from the environment.

Values come from the process environment, optionally seeded from a ``.env``
(or ``env``) file in the working directory.
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple
from dotenv import load_dotenv


DEFAULT_API_BASE = "https://api.github.com"
DEFAULT_ORG = "opploans"
DEFAULT_REPOS: Tuple[str, ...] = (
    "loanarranger",
    "bankbucl",
    "laalaaland",
    "leadzeppelin",
    "audit",
    "hammurabi",
)


class ConfigurationError(Exception):
    """Raised when required settings are missing or invalid."""
    pass


@dataclass(frozen=True)
class HappyGitConfig:
    """Settings shared by the GitHub client and the happiness service."""
    token: str
    org: str = DEFAULT_ORG
    repos: Tuple[str, ...] = DEFAULT_REPOS
    api_base: str = DEFAULT_API_BASE
    per_page: Optional[int] = None
    log_level: str = "INFO"

    @property
    def auth_headers(self) -> dict:
        """Headers sent with every GitHub request."""
        return {
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github+json",
        }


def _parse_repos(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_REPOS
    repos = tuple(name.strip() for name in raw.split(",") if name.strip())
    if not repos:
        raise ConfigurationError("HAPPYGIT_REPOS does not name any repository")
    return repos


def _parse_per_page(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    try:
        per_page = int(raw)
    except ValueError:
        raise ConfigurationError(f"GITHUB_PER_PAGE must be an integer, got {raw!r}")
    if not 1 <= per_page <= 100:  # GitHub max is 100
        raise ConfigurationError(f"GITHUB_PER_PAGE must be between 1 and 100, got {per_page}")
    return per_page


def _parse_log_level(raw: Optional[str]) -> str:
    level = (raw or "").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"LOG_LEVEL must be a logging level name, got {raw!r}")
    return level


def load_config(environ: Optional[Mapping[str, str]] = None) -> HappyGitConfig:
    """Build the configuration, failing fast when GITHUB_TOKEN is absent.

    Args:
        environ: Mapping to read instead of os.environ; no .env file is
            loaded when one is given

    Returns:
        Validated HappyGitConfig

    Raises:
        ConfigurationError: When a setting is missing or malformed
    """
    if environ is None:
        # Load environment variables from .env or env file
        load_dotenv('.env') or load_dotenv('env')
        environ = os.environ

    token = (environ.get("GITHUB_TOKEN") or "").strip()
    if not token:
        raise ConfigurationError("GITHUB_TOKEN environment variable is required")

    return HappyGitConfig(
        token=token,
        org=environ.get("HAPPYGIT_ORG") or DEFAULT_ORG,
        repos=_parse_repos(environ.get("HAPPYGIT_REPOS")),
        api_base=(environ.get("GITHUB_API_BASE") or DEFAULT_API_BASE).rstrip("/"),
        per_page=_parse_per_page(environ.get("GITHUB_PER_PAGE")),
        log_level=_parse_log_level(environ.get("LOG_LEVEL")),
    )
