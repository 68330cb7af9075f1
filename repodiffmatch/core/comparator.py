"""
Pairwise comparison of two repositories' source files.
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence, Set, Tuple

from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    TaskProgressColumn,
    TimeElapsedColumn
)

from .errors import ConfigError
from .normalizer import normalize
from .results import ComparisonReport, ComparisonStats, SourceFile
from .similarity import similarity


logger = logging.getLogger(__name__)


class ContentFetcher(Protocol):
    """Anything that can fetch the content of a listed source file."""

    def fetch_file(self, file: SourceFile) -> Optional[str]:
        """Return the file content, or None when it is unavailable."""
        ...


@dataclass
class ComparisonLimits:
    """Bounds on how much work a comparison may do."""
    max_files: int = 100
    max_file_chars: int = 50000
    batch_size: int = 10
    fetch_workers: int = 1  # 1 keeps fetches strictly sequential
    cache_targets: bool = True

    def __post_init__(self):
        """Validate limits."""
        for name in ("max_files", "max_file_chars", "batch_size", "fetch_workers"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ConfigError(
                    f"comparison.{name} must be a positive integer, got {value!r}",
                    key=f"comparison.{name}"
                )

    @classmethod
    def from_config(cls, config) -> "ComparisonLimits":
        """Create limits from the 'comparison' section of a Config."""
        defaults = cls()
        return cls(
            max_files=config.get("comparison.max_files", defaults.max_files),
            max_file_chars=config.get("comparison.max_file_chars", defaults.max_file_chars),
            batch_size=config.get("comparison.batch_size", defaults.batch_size),
            fetch_workers=config.get("comparison.fetch_workers", defaults.fetch_workers),
            cache_targets=bool(config.get("comparison.cache_targets", defaults.cache_targets)),
        )


class PairwiseComparator:
    """
    Scores every source file of one repository against every file of another.

    Side-A files are processed in batches; each side-A file is normalized once
    per batch and compared against all side-B files. Files whose content is
    unavailable or larger than max_file_chars are skipped entirely.
    """

    def __init__(
        self,
        fetcher: ContentFetcher,
        limits: Optional[ComparisonLimits] = None,
        show_progress: bool = False,
        console: Optional[Console] = None
    ):
        """
        Initialize comparator.

        Args:
            fetcher: Source of file contents
            limits: Work bounds (defaults apply when omitted)
            show_progress: Whether to show a progress bar over batches
            console: Console for progress output
        """
        self.fetcher = fetcher
        self.limits = limits or ComparisonLimits()
        self.show_progress = show_progress
        self.console = console or Console(stderr=True)

    def create_batches(self, files: Sequence[SourceFile]) -> List[List[SourceFile]]:
        """Split files into consecutive batches of limits.batch_size."""
        size = self.limits.batch_size
        return [list(files[i:i + size]) for i in range(0, len(files), size)]

    def compare(
        self,
        files_a: Sequence[SourceFile],
        files_b: Sequence[SourceFile],
        repository_a: str = "",
        repository_b: str = ""
    ) -> ComparisonReport:
        """
        Compare two file lists and build a report.

        Args:
            files_a: Source-side file descriptors, in listing order
            files_b: Target-side file descriptors, in listing order
            repository_a: Label for the source repository
            repository_b: Label for the target repository

        Returns:
            Finalized comparison report
        """
        max_files = self.limits.max_files
        stats = ComparisonStats(
            files_a_total=len(files_a),
            files_b_total=len(files_b),
            truncated_a=len(files_a) > max_files,
            truncated_b=len(files_b) > max_files,
        )
        limited_a = list(files_a[:max_files])
        limited_b = list(files_b[:max_files])
        stats.files_a_considered = len(limited_a)
        stats.files_b_considered = len(limited_b)

        if stats.truncated:
            logger.info(
                f"Large repositories detected. Analyzing first {max_files} files from each repo."
            )

        report = ComparisonReport(
            repository_a=repository_a,
            repository_b=repository_b,
            stats=stats
        )

        batches = self.create_batches(limited_a)
        stats.batches = len(batches)

        logger.info(
            f"Comparing {len(limited_a)} x {len(limited_b)} files in {len(batches)} batches "
            f"(batch size: {self.limits.batch_size})"
        )

        start_time = time.time()
        failed: Set[Tuple[str, str]] = set()
        oversized: Set[Tuple[str, str]] = set()
        target_cache: Dict[Tuple[str, str], Optional[str]] = {}

        if self.show_progress:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                TimeElapsedColumn(),
                console=self.console,
                refresh_per_second=2
            ) as progress:
                task = progress.add_task(
                    "[green]Analyzing file similarities",
                    total=len(batches)
                )
                for batch in batches:
                    self._process_batch(batch, limited_b, report, failed, oversized, target_cache)
                    progress.update(task, advance=1)
        else:
            for batch in batches:
                self._process_batch(batch, limited_b, report, failed, oversized, target_cache)

        stats.fetch_failures = len(failed)
        stats.oversized_skips = len(oversized)
        report.finalize()

        logger.info(
            f"Analysis complete in {time.time() - start_time:.2f}s: "
            f"{stats.pairs_compared} pairs, {len(report.identical_pairs)} identical, "
            f"{len(report.similar_pairs)} similar"
        )
        return report

    def _process_batch(
        self,
        batch: List[SourceFile],
        files_b: List[SourceFile],
        report: ComparisonReport,
        failed: Set[Tuple[str, str]],
        oversized: Set[Tuple[str, str]],
        target_cache: Dict[Tuple[str, str], Optional[str]]
    ) -> None:
        """Compare one batch of side-A files against all side-B files."""
        sources = self._load_batch(batch, failed, oversized)

        for file_a, normalized_a in zip(batch, sources):
            if normalized_a is None:
                continue

            for file_b in files_b:
                key = (file_b.repository, file_b.path)
                if self.limits.cache_targets and key in target_cache:
                    normalized_b = target_cache[key]
                else:
                    normalized_b = self._load(file_b, failed, oversized)
                    if self.limits.cache_targets:
                        target_cache[key] = normalized_b
                if normalized_b is None:
                    continue

                score = similarity(normalized_a, normalized_b)
                report.stats.pairs_compared += 1
                report.add(file_a.path, file_b.path, score)

        logger.debug(f"Finished batch of {len(batch)} files")

    def _load_batch(
        self,
        batch: List[SourceFile],
        failed: Set[Tuple[str, str]],
        oversized: Set[Tuple[str, str]]
    ) -> List[Optional[str]]:
        """Fetch and normalize a batch of side-A files, preserving order."""
        workers = min(self.limits.fetch_workers, len(batch))
        if workers <= 1:
            return [self._load(f, failed, oversized) for f in batch]

        with ThreadPoolExecutor(max_workers=workers) as executor:
            contents = list(executor.map(self.fetcher.fetch_file, batch))
        return [
            self._accept(f, content, failed, oversized)
            for f, content in zip(batch, contents)
        ]

    def _load(
        self,
        file: SourceFile,
        failed: Set[Tuple[str, str]],
        oversized: Set[Tuple[str, str]]
    ) -> Optional[str]:
        """Fetch and normalize one file, or None if it must be skipped."""
        return self._accept(file, self.fetcher.fetch_file(file), failed, oversized)

    def _accept(
        self,
        file: SourceFile,
        content: Optional[str],
        failed: Set[Tuple[str, str]],
        oversized: Set[Tuple[str, str]]
    ) -> Optional[str]:
        """Apply the skip policy to fetched content and normalize what remains."""
        key = (file.repository, file.path)
        if not content:
            if key not in failed:
                logger.debug(f"Skipping {file.repository}:{file.path}: content unavailable")
            failed.add(key)
            return None
        if len(content) > self.limits.max_file_chars:
            if key not in oversized:
                logger.debug(
                    f"Skipping {file.repository}:{file.path}: "
                    f"{len(content)} chars exceeds {self.limits.max_file_chars}"
                )
            oversized.add(key)
            return None
        return normalize(content)
