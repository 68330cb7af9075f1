"""GitHub repository access."""

from .client import GitHubClient, FileLister, RepositoryInfo, is_source_path
from .repository import RepositoryRef, parse_repository

__all__ = [
    'GitHubClient',
    'FileLister',
    'RepositoryInfo',
    'is_source_path',
    'RepositoryRef',
    'parse_repository',
]
