"""RepoDiffMatch - Compare GitHub repositories for copied source code."""

__version__ = "1.0.0"

from .core.normalizer import normalize
from .core.similarity import similarity
from .core.comparator import PairwiseComparator, ComparisonLimits
from .core.results import ComparisonReport, SimilarityResult, SourceFile

__all__ = [
    "normalize",
    "similarity",
    "PairwiseComparator",
    "ComparisonLimits",
    "ComparisonReport",
    "SimilarityResult",
    "SourceFile",
    "__version__",
]
