"""
Error types for repository comparison.

Fatal errors (bad repository identifiers, listing failures, bad configuration)
derive from RepoDiffError. Per-file fetch failures and size-limit skips are
not errors and never leave the comparator.
"""

from enum import Enum
from typing import Optional, Any, Dict, List


class ListingFailure(Enum):
    """Reasons a repository file listing can fail."""
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    RATE_LIMITED = "rate_limited"
    AUTH_REQUIRED = "auth_required"
    NETWORK = "network"


class RepoDiffError(Exception):
    """
    Base exception for all fatal comparison errors.
    
    Carries a structured details dict so renderers can format messages
    independently of the control flow that raised them.
    """
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize error.
        
        Args:
            message: Error message
            details: Optional structured error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidRepositoryError(RepoDiffError):
    """Raised when a repository identifier cannot be parsed."""
    
    def __init__(self, input_text: str):
        super().__init__(
            f"Invalid GitHub repository format: {input_text!r}",
            details={'input': input_text}
        )
        self.input_text = input_text


class ListingError(RepoDiffError):
    """
    Raised when a repository's file tree cannot be enumerated.
    
    Fatal to the whole comparison; no partial report is produced.
    """
    
    def __init__(self, repository: str,
                 kind: ListingFailure,
                 status: Optional[int] = None,
                 cause: Optional[str] = None):
        """
        Initialize listing error.
        
        Args:
            repository: Repository identifier (owner/name)
            kind: Failure category
            status: HTTP status code if one was received
            cause: Underlying error text
        """
        message = f"Failed to list files for {repository}: {kind.value}"
        if cause:
            message = f"{message} ({cause})"
        super().__init__(message, details={
            'repository': repository,
            'kind': kind.value,
            'status': status,
            'cause': cause,
        })
        self.repository = repository
        self.kind = kind
        self.status = status
        self.cause = cause


class ConfigError(RepoDiffError):
    """Raised when configuration values are invalid."""
    
    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message, details={'key': key})
        self.key = key


_LISTING_REMEDIES = {
    ListingFailure.NOT_FOUND: (
        "Repository Not Found",
        "Repository does not exist or is not accessible",
        [
            "Check the repository name spelling",
            "Verify the repository exists on GitHub",
            "Ensure the repository is public",
            "Check that the branch exists (use --branch)",
        ],
    ),
    ListingFailure.FORBIDDEN: (
        "Access Forbidden",
        "Private repository or access denied",
        [
            "Check if repository is public",
            "Try again later",
        ],
    ),
    ListingFailure.RATE_LIMITED: (
        "Rate Limit Exceeded",
        "GitHub API rate limit exceeded",
        [
            "Wait 1 hour for rate limit reset (60 requests/hour limit)",
            "Use smaller repositories to reduce API calls",
        ],
    ),
    ListingFailure.AUTH_REQUIRED: (
        "Authentication Required",
        "Repository requires authentication",
        [
            "Repository may be private",
            "Ensure repository is public for comparison",
        ],
    ),
    ListingFailure.NETWORK: (
        "Network/API Error",
        "Request to the GitHub API failed",
        [
            "Check your internet connection",
            "Try again in a few minutes",
            "Verify GitHub is accessible",
        ],
    ),
}


def describe_error(error: RepoDiffError) -> Dict[str, Any]:
    """
    Build a human-facing description for an error.
    
    Returns:
        Dict with 'title', 'reason', 'subject' and 'solutions' keys
    """
    if isinstance(error, ListingError):
        title, reason, solutions = _LISTING_REMEDIES[error.kind]
        if error.status:
            title = f"ERROR {error.status} - {title}"
        if error.cause and error.kind is ListingFailure.NETWORK:
            reason = error.cause
        return {
            'title': title,
            'subject': f"Repository: {error.repository}",
            'reason': reason,
            'solutions': list(solutions),
        }
    
    if isinstance(error, InvalidRepositoryError):
        solutions: List[str] = [
            "Use format: owner/repository",
            "Use full URL: https://github.com/owner/repository",
            "Check for typos in repository name",
            "Ensure no extra characters or spaces",
        ]
        return {
            'title': "ERROR INPUT - Invalid Repository Format",
            'subject': f"Input: {error.input_text}",
            'reason': "Invalid GitHub repository format",
            'solutions': solutions,
        }
    
    return {
        'title': "ERROR - Comparison Failed",
        'subject': "",
        'reason': error.message,
        'solutions': [],
    }
