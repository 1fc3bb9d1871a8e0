"""Repository slug utilities.

Repository slugs are GitHub identifiers in ``owner/name`` format. They are not
filesystem paths, even though they use ``/`` as a separator, so they should be
parsed using these helpers rather than ``pathlib``.
"""

from __future__ import annotations

import dataclasses

from slashdispatch.errors import MalformedRepositoryReferenceError


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryReference:
    """Structured ``owner/name`` reference to a GitHub repository.

    Attributes
    ----------
    owner:
        GitHub repository owner (organisation or user).
    name:
        GitHub repository name.

    """

    owner: str
    name: str

    @property
    def slug(self) -> str:
        """Return the GitHub-style owner/name identifier."""
        return repo_slug(self.owner, self.name)


def repo_slug(owner: str, name: str) -> str:
    """Build a repository slug from owner and name.

    Examples
    --------
    >>> repo_slug("acme", "widgets")
    'acme/widgets'

    """
    return f"{owner}/{name}"


def parse_repo_slug(slug: str) -> RepositoryReference:
    """Parse a repository slug into a :class:`RepositoryReference`.

    The slug must contain exactly one ``/`` with a non-empty owner and name.
    Anything else is rejected rather than truncated, so a partial reference
    never reaches the remote API.

    Parameters
    ----------
    slug:
        Repository slug in ``owner/name`` format.

    Returns
    -------
    RepositoryReference
        The parsed owner and name.

    Raises
    ------
    MalformedRepositoryReferenceError
        If the slug is not in ``owner/name`` format.

    Examples
    --------
    >>> parse_repo_slug("acme/widgets")
    RepositoryReference(owner='acme', name='widgets')

    """
    if slug.count("/") != 1:
        raise MalformedRepositoryReferenceError.for_slug(slug)

    owner, name = slug.split("/")
    if not owner or not name:
        raise MalformedRepositoryReferenceError.for_slug(slug)

    return RepositoryReference(owner=owner, name=name)
