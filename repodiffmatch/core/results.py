"""Core comparison result data structures."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, TypedDict


# Pairs scoring at or below this are not reported
SIMILARITY_THRESHOLD = 0.7

# Pairs scoring above this count as high similarity
HIGH_SIMILARITY_THRESHOLD = 0.9


@dataclass(frozen=True)
class SourceFile:
    """A source file enumerated from a repository listing."""

    repository: str
    path: str
    sha: str
    size: Optional[int] = None


class SimilarityResultDict(TypedDict):
    """Type definition for similarity result dictionary representation."""
    file_a: str
    file_b: str
    score: float
    percentage: float


@dataclass(frozen=True)
class SimilarityResult:
    """Similarity score for one file pair."""

    file_a: str
    file_b: str
    score: float

    @property
    def percentage(self) -> float:
        return round(self.score * 100, 1)

    @property
    def severity(self) -> str:
        """Severity band used by renderers."""
        if self.score > HIGH_SIMILARITY_THRESHOLD:
            return "high"
        if self.score > 0.8:
            return "medium"
        return "low"

    def to_dict(self) -> SimilarityResultDict:
        return {
            "file_a": self.file_a,
            "file_b": self.file_b,
            "score": self.score,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class IdenticalPair:
    """A file pair whose normalized contents match exactly."""

    file_a: str
    file_b: str

    def to_dict(self) -> Dict[str, str]:
        return {"file_a": self.file_a, "file_b": self.file_b}


@dataclass(frozen=True)
class ReportSummary:
    """Summary statistics over the similar pairs of a report."""

    similar_count: int
    identical_count: int
    high_similarity_count: int
    average_similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "similar_count": self.similar_count,
            "identical_count": self.identical_count,
            "high_similarity_count": self.high_similarity_count,
            "average_similarity": self.average_similarity,
        }


@dataclass
class ComparisonStats:
    """Counters describing how much of each repository was compared."""

    files_a_total: int = 0
    files_b_total: int = 0
    files_a_considered: int = 0
    files_b_considered: int = 0
    truncated_a: bool = False
    truncated_b: bool = False
    pairs_compared: int = 0
    fetch_failures: int = 0
    oversized_skips: int = 0
    batches: int = 0

    @property
    def truncated(self) -> bool:
        """Whether either file list was cut down to the file cap."""
        return self.truncated_a or self.truncated_b

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_a_total": self.files_a_total,
            "files_b_total": self.files_b_total,
            "files_a_considered": self.files_a_considered,
            "files_b_considered": self.files_b_considered,
            "truncated_a": self.truncated_a,
            "truncated_b": self.truncated_b,
            "pairs_compared": self.pairs_compared,
            "fetch_failures": self.fetch_failures,
            "oversized_skips": self.oversized_skips,
            "batches": self.batches,
        }


@dataclass
class ComparisonReport:
    """
    Aggregated outcome of comparing two repositories.

    Every pair scoring exactly 1.0 lands in identical_pairs, every pair scoring
    above SIMILARITY_THRESHOLD but below 1.0 lands in similar_pairs, and
    everything else is dropped.
    """

    repository_a: str = ""
    repository_b: str = ""
    identical_pairs: List[IdenticalPair] = field(default_factory=list)
    similar_pairs: List[SimilarityResult] = field(default_factory=list)
    stats: ComparisonStats = field(default_factory=ComparisonStats)

    def add(self, file_a: str, file_b: str, score: float) -> None:
        """Classify a scored pair into the matching bucket."""
        if score == 1.0:
            self.identical_pairs.append(IdenticalPair(file_a, file_b))
        elif score > SIMILARITY_THRESHOLD:
            self.similar_pairs.append(SimilarityResult(file_a, file_b, score))

    def finalize(self) -> None:
        """Order similar pairs by descending score, keeping encounter order on ties."""
        self.similar_pairs.sort(key=lambda r: r.score, reverse=True)

    @property
    def summary(self) -> ReportSummary:
        count = len(self.similar_pairs)
        average = sum(r.score for r in self.similar_pairs) / count if count else 0.0
        return ReportSummary(
            similar_count=count,
            identical_count=len(self.identical_pairs),
            high_similarity_count=sum(
                1 for r in self.similar_pairs if r.score > HIGH_SIMILARITY_THRESHOLD
            ),
            average_similarity=average,
        )

    @property
    def risk_level(self) -> str:
        """Plagiarism risk commentary derived from the average similarity."""
        if not self.similar_pairs:
            return "none"
        average = self.summary.average_similarity
        if average > 0.8:
            return "high"
        if average > 0.6:
            return "moderate"
        return "low"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "repository_a": self.repository_a,
            "repository_b": self.repository_b,
            "identical_pairs": [p.to_dict() for p in self.identical_pairs],
            "similar_pairs": [r.to_dict() for r in self.similar_pairs],
            "summary": self.summary.to_dict(),
            "risk_level": self.risk_level,
            "stats": self.stats.to_dict(),
        }
