"""
GitHub REST API client for listing and fetching repository source files.

No authentication is performed; only public repositories can be compared and
the unauthenticated rate limit applies.
"""

import re
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Union

import requests

from .. import __version__
from ..core.errors import ListingError, ListingFailure
from ..core.results import SourceFile
from .repository import RepositoryRef, parse_repository


logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
RAW_MEDIA_TYPE = "application/vnd.github.v3.raw"

SOURCE_EXTENSIONS = ("js", "ts", "py", "java", "cpp", "c", "h", "cs", "php", "rb", "go", "rs")
EXCLUDED_SEGMENTS = ("node_modules/", ".git/", "dist/", "build/")

_SOURCE_PATTERN = re.compile(
    r"\.(" + "|".join(SOURCE_EXTENSIONS) + r")$",
    re.IGNORECASE
)


class FileLister(Protocol):
    """Anything that can enumerate a repository's source files."""

    def list_files(self, repository: RepositoryRef) -> List[SourceFile]:
        """Return source files in listing order or raise ListingError."""
        ...


@dataclass
class RepositoryInfo:
    """Result of probing a repository's metadata."""
    exists: bool
    full_name: str
    private: bool = False
    default_branch: Optional[str] = None
    error: Optional[str] = None


def is_source_path(path: str) -> bool:
    """Whether a tree path is a source file outside dependency/build/VCS directories."""
    if not _SOURCE_PATTERN.search(path):
        return False
    return not any(segment in path for segment in EXCLUDED_SEGMENTS)


class GitHubClient:
    """Lists repository trees and fetches blob contents over the GitHub REST API."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        branch: str = "main",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize client.

        Args:
            api_url: Base URL of the GitHub API
            branch: Branch whose tree is listed
            timeout: Per-request timeout in seconds
            session: Optional requests session (a new one is created if omitted)
        """
        self.api_url = api_url.rstrip("/")
        self.branch = branch
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", f"repodiffmatch/{__version__}")

    @classmethod
    def from_config(cls, config, session: Optional[requests.Session] = None) -> "GitHubClient":
        """Create a client from the 'github' section of a Config."""
        return cls(
            api_url=config.get("github.api_url", DEFAULT_API_URL),
            branch=config.get("github.branch", "main"),
            timeout=float(config.get("github.timeout", 30.0)),
            session=session
        )

    def list_files(self, repository: RepositoryRef) -> List[SourceFile]:
        """
        List source files on the configured branch.

        Raises:
            ListingError: if the tree cannot be retrieved
        """
        url = f"{self.api_url}/repos/{repository.full_name}/git/trees/{self.branch}"
        logger.info(f"Fetching files from {repository.full_name}")

        try:
            response = self.session.get(url, params={"recursive": "1"}, timeout=self.timeout)
        except requests.RequestException as e:
            raise ListingError(repository.full_name, ListingFailure.NETWORK, cause=str(e)) from e

        if response.status_code != 200:
            kind = self._classify_failure(response)
            raise ListingError(
                repository.full_name,
                kind,
                status=response.status_code,
                cause=self._error_message(response)
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ListingError(
                repository.full_name,
                ListingFailure.NETWORK,
                status=response.status_code,
                cause=f"Invalid JSON in tree response: {e}"
            ) from e

        tree = data.get("tree", [])
        if data.get("truncated"):
            logger.warning(f"Tree listing for {repository.full_name} was truncated by GitHub")

        files = [
            SourceFile(
                repository=repository.full_name,
                path=item["path"],
                sha=item["sha"],
                size=item.get("size")
            )
            for item in tree
            if item.get("type") == "blob" and is_source_path(item.get("path", ""))
        ]

        logger.info(f"Found {len(files)} source files in {repository.full_name}")
        return files

    def fetch_content(self, repository: Union[RepositoryRef, str], sha: str) -> Optional[str]:
        """Fetch a blob's raw text, or None on any failure."""
        if isinstance(repository, str):
            repository = parse_repository(repository)

        url = f"{self.api_url}/repos/{repository.full_name}/git/blobs/{sha}"
        try:
            response = self.session.get(
                url,
                headers={"Accept": RAW_MEDIA_TYPE},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.debug(f"Blob {sha} in {repository.full_name} unavailable: {e}")
            return None

        if response.status_code != 200:
            logger.debug(
                f"Blob {sha} in {repository.full_name} unavailable: HTTP {response.status_code}"
            )
            return None

        # A leading byte order mark is not part of the source text
        return response.text.removeprefix("\ufeff")

    def fetch_file(self, file: SourceFile) -> Optional[str]:
        """Fetch the content of a listed source file."""
        return self.fetch_content(file.repository, file.sha)

    def validate_repository(self, repository: RepositoryRef) -> RepositoryInfo:
        """Check whether a repository exists and is visible."""
        url = f"{self.api_url}/repos/{repository.full_name}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            return RepositoryInfo(exists=False, full_name=repository.full_name, error=str(e))

        if response.status_code != 200:
            error = "not found" if response.status_code == 404 else "access denied"
            return RepositoryInfo(exists=False, full_name=repository.full_name, error=error)

        data = response.json()
        return RepositoryInfo(
            exists=True,
            full_name=data.get("full_name", repository.full_name),
            private=bool(data.get("private", False)),
            default_branch=data.get("default_branch")
        )

    @staticmethod
    def _classify_failure(response: requests.Response) -> ListingFailure:
        """Map a failed listing response onto a ListingFailure."""
        status = response.status_code
        if status == 404:
            return ListingFailure.NOT_FOUND
        if status == 401:
            return ListingFailure.AUTH_REQUIRED
        if status == 429:
            return ListingFailure.RATE_LIMITED
        if status == 403:
            if response.headers.get("X-RateLimit-Remaining") == "0":
                return ListingFailure.RATE_LIMITED
            return ListingFailure.FORBIDDEN
        return ListingFailure.NETWORK

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract GitHub's error message from a response body."""
        try:
            body: Dict = response.json()
        except ValueError:
            return f"HTTP {response.status_code}"
        return body.get("message") or f"HTTP {response.status_code}"
