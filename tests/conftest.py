"""Shared fixtures for repodiffmatch tests."""

from typing import Dict, List, Optional

import pytest

from repodiffmatch.core.errors import ListingError
from repodiffmatch.core.results import SourceFile


class FakeFetcher:
    """In-memory content source keyed by (repository, sha)."""

    def __init__(self, contents: Dict[tuple, Optional[str]]):
        self.contents = contents
        self.calls: List[SourceFile] = []

    def fetch_file(self, file: SourceFile) -> Optional[str]:
        self.calls.append(file)
        return self.contents.get((file.repository, file.sha))


class FakeLister:
    """In-memory repository listing; raises a configured error per repository."""

    def __init__(self, listings: Dict[str, List[SourceFile]], errors: Optional[Dict[str, ListingError]] = None):
        self.listings = listings
        self.errors = errors or {}
        self.requested: List[str] = []

    def list_files(self, repository) -> List[SourceFile]:
        self.requested.append(repository.full_name)
        if repository.full_name in self.errors:
            raise self.errors[repository.full_name]
        return list(self.listings.get(repository.full_name, []))


def build_repo(repository: str, files: Dict[str, Optional[str]]):
    """Create (source files, fetcher contents) for a path -> content mapping."""
    sources = []
    contents = {}
    for index, (path, content) in enumerate(files.items()):
        sha = f"{repository}-{index}"
        sources.append(SourceFile(repository=repository, path=path, sha=sha))
        contents[(repository, sha)] = content
    return sources, contents


@pytest.fixture
def make_repo():
    """Factory fixture for in-memory repositories."""
    return build_repo


@pytest.fixture
def fetcher_factory():
    """Factory fixture for fake fetchers."""
    return FakeFetcher


@pytest.fixture
def lister_factory():
    """Factory fixture for fake listers."""
    return FakeLister
