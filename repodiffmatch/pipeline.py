"""End-to-end comparison of two GitHub repositories."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from rich.console import Console

from .config import Config
from .core.comparator import ContentFetcher, ComparisonLimits, PairwiseComparator
from .core.results import ComparisonReport
from .github.client import FileLister, GitHubClient
from .github.repository import parse_repository


logger = logging.getLogger(__name__)


def compare_repositories(
    repo_a: str,
    repo_b: str,
    config: Optional[Config] = None,
    lister: Optional[FileLister] = None,
    fetcher: Optional[ContentFetcher] = None,
    show_progress: bool = False,
    console: Optional[Console] = None
) -> ComparisonReport:
    """
    Compare the source files of two repositories.

    Both repository listings are requested concurrently. A malformed identifier
    or a failed listing aborts the whole comparison; per-file fetch failures
    only shrink the report.

    Args:
        repo_a: Source repository ('owner/repo' or GitHub URL)
        repo_b: Target repository ('owner/repo' or GitHub URL)
        config: Configuration (defaults when omitted)
        lister: File listing provider (GitHub client when omitted)
        fetcher: Content provider (GitHub client when omitted)
        show_progress: Whether to show batch progress
        console: Console for progress output

    Returns:
        Finalized comparison report

    Raises:
        InvalidRepositoryError: if either identifier cannot be parsed
        ListingError: if either repository cannot be listed
    """
    config = config or Config()
    ref_a = parse_repository(repo_a)
    ref_b = parse_repository(repo_b)
    limits = ComparisonLimits.from_config(config)

    if lister is None or fetcher is None:
        client = GitHubClient.from_config(config)
        lister = lister or client
        fetcher = fetcher or client

    logger.info(f"Comparing repositories: {ref_a} -> {ref_b}")

    with ThreadPoolExecutor(max_workers=2) as executor:
        future_a = executor.submit(lister.list_files, ref_a)
        future_b = executor.submit(lister.list_files, ref_b)
        files_a = future_a.result()
        files_b = future_b.result()

    comparator = PairwiseComparator(
        fetcher,
        limits=limits,
        show_progress=show_progress,
        console=console
    )
    return comparator.compare(
        files_a,
        files_b,
        repository_a=ref_a.full_name,
        repository_b=ref_b.full_name
    )
