"""GitHub repository identifier parsing."""

import re
from dataclasses import dataclass

from ..core.errors import InvalidRepositoryError


_URL_PATTERN = re.compile(r"github\.com/([^/]+)/([^/?#]+)")
_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass(frozen=True)
class RepositoryRef:
    """An owner/name pair identifying a GitHub repository."""
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name


def parse_repository(text: str) -> RepositoryRef:
    """
    Parse 'owner/repo' or a github.com URL into a RepositoryRef.

    Raises:
        InvalidRepositoryError: if the input is not a recognizable identifier
    """
    candidate = text.strip()

    if "github.com" in candidate:
        match = _URL_PATTERN.search(candidate)
        if not match:
            raise InvalidRepositoryError(text)
        owner, name = match.group(1), match.group(2)
    elif candidate.count("/") == 1:
        owner, name = candidate.split("/")
    else:
        raise InvalidRepositoryError(text)

    if name.endswith(".git"):
        name = name[:-4]

    if not (_NAME_PATTERN.match(owner) and _NAME_PATTERN.match(name)):
        raise InvalidRepositoryError(text)

    return RepositoryRef(owner=owner, name=name)
