"""Provider adapters translating listing APIs into RepositoryCandidate streams.

Each adapter wraps one provider client and exposes the same two operations:
``list_candidates()`` lazily yields every repository of the configured
source in provider order, and ``probe_marker_file()`` tells whether a
candidate carries the marker file on its default ref.

Listing failures surface as ProviderListingError from the iterator. Probe
failures never raise: an error is the same as an absent file.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, Optional, Tuple

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from repository.azure_devops import AzureDevOpsClient
from repository.errors import AdapterConfigurationError, ProviderError, ProviderListingError
from repository.github import GitHubClient
from repository.gitlab import GitLabClient
from repository.models import RepositoryCandidate

logger = logging.getLogger(__name__)


class ProviderAdapter(ABC):
    """Uniform view over one provider's repository listing and file probe."""

    name = "provider"
    supports_archival_check = True

    def __init__(self, identifier: str, credential: str = ""):
        self.identifier = identifier
        self.credential = credential

    @abstractmethod
    def list_candidates(self) -> Iterator[RepositoryCandidate]:
        """Yield every repository of the source, in provider listing order."""

    @abstractmethod
    def _fetch_marker(self, candidate: RepositoryCandidate) -> Optional[Any]:
        """Fetch the marker file for a candidate, None when absent."""

    def probe_marker_file(self, candidate: RepositoryCandidate) -> bool:
        """Return True when the marker file exists on the candidate's default ref."""
        try:
            found = self._fetch_marker(candidate)
        except ProviderError as exc:
            logger.debug(
                "Marker probe failed for %s in %s: %s", candidate.name, self.identifier, exc,
                extra=extra_context(
                    event="probe", component="adapter", action="probe_marker_file",
                    outcome="error", source=self.identifier, repository=candidate.name
                )
            )
            return False
        if is_debug_enabled(logger):
            logger.debug(
                "Marker probe for %s in %s: %s", candidate.name, self.identifier,
                "present" if found else "absent",
                extra=extra_context(
                    event="probe", component="adapter", action="probe_marker_file",
                    outcome="present" if found else "absent",
                    source=self.identifier, repository=candidate.name
                )
            )
        return bool(found)

    def _listing_error(self, exc: ProviderError, page: Optional[int] = None) -> ProviderListingError:
        where = f" (page {page})" if page is not None else ""
        return ProviderListingError(
            f"could not list {self.name} repositories for {self.identifier}{where}: {exc}"
        )


class GitHubProviderAdapter(ProviderAdapter):
    """Organization repositories from GitHub, paginated via the Link header."""

    name = "github"

    def __init__(self, identifier: str, credential: str = "", client: Optional[GitHubClient] = None):
        super().__init__(identifier, credential)
        self.client = client or GitHubClient(token=credential)

    def list_candidates(self) -> Iterator[RepositoryCandidate]:
        page = 1
        while True:
            try:
                repos, has_next = self.client.list_org_repos(
                    self.identifier, page, Constants.REPO_API_PER_PAGE
                )
            except ProviderError as exc:
                raise self._listing_error(exc, page) from exc

            for repo in repos:
                yield self._to_candidate(repo)

            if not has_next or not repos:
                break
            page += 1

    def _fetch_marker(self, candidate: RepositoryCandidate) -> Optional[Any]:
        return self.client.get_file_contents(
            self.identifier, candidate.name, Constants.MARKER_FILE, ref=candidate.default_ref
        )

    @staticmethod
    def _to_candidate(repo: Dict[str, Any]) -> RepositoryCandidate:
        return RepositoryCandidate(
            name=repo.get("name") or "",
            archived=bool(repo.get("archived")),
            default_ref=repo.get("default_branch"),
            clone_url=repo.get("ssh_url") or "",
            id=repo.get("id"),
        )


class GitLabProviderAdapter(ProviderAdapter):
    """Group projects (subgroups included) from GitLab, paginated via x-page headers."""

    name = "gitlab"

    def __init__(self, identifier: str, credential: str = "", client: Optional[GitLabClient] = None):
        super().__init__(identifier, credential)
        self.client = client or GitLabClient(token=credential)

    def list_candidates(self) -> Iterator[RepositoryCandidate]:
        page = 1
        per_page = Constants.REPO_API_PER_PAGE
        while True:
            try:
                projects, current_page, total_pages = self.client.list_group_projects(
                    self.identifier, page, per_page, include_subgroups=True
                )
            except ProviderError as exc:
                raise self._listing_error(exc, page) from exc

            for project in projects:
                yield self._to_candidate(project)

            if not projects:
                break
            if current_page is not None and total_pages is not None:
                if current_page >= total_pages:
                    break
                page = current_page + 1
            elif len(projects) < per_page:
                break
            else:
                page += 1

    def _fetch_marker(self, candidate: RepositoryCandidate) -> Optional[Any]:
        if not candidate.default_ref:
            # Empty repositories have no default branch
            return None
        return self.client.get_file(candidate.id, Constants.MARKER_FILE, candidate.default_ref)

    @staticmethod
    def _to_candidate(project: Dict[str, Any]) -> RepositoryCandidate:
        return RepositoryCandidate(
            name=project.get("name") or "",
            archived=bool(project.get("archived")),
            default_ref=project.get("default_branch"),
            clone_url=project.get("ssh_url_to_repo") or "",
            id=project.get("id"),
        )


def split_azure_identifier(identifier: str) -> Tuple[str, str]:
    """Split "<organization url>/<project>" on its last path segment.

    Raises:
        AdapterConfigurationError: If either part is missing.
    """
    organization, sep, project = identifier.rstrip("/").rpartition("/")
    if not sep or not organization or not project:
        raise AdapterConfigurationError(
            f"azdo source identifier {identifier!r} must look like <organization url>/<project>"
        )
    return organization, project


class AzureDevOpsProviderAdapter(ProviderAdapter):
    """Project repositories from Azure DevOps, listed in a single call.

    The stable Git API exposes no archival flag (``isDisabled`` only exists
    from API version 7.1 on), so every repository is reported as active and
    ``supports_archival_check`` is False.
    """

    name = "azdo"
    supports_archival_check = False

    def __init__(self, identifier: str, credential: str = "", client: Optional[AzureDevOpsClient] = None):
        super().__init__(identifier, credential)
        self.organization, self.project = split_azure_identifier(identifier)
        self.client = client or AzureDevOpsClient(self.organization, token=credential)

    def list_candidates(self) -> Iterator[RepositoryCandidate]:
        try:
            repos = self.client.get_repositories(self.project)
        except ProviderError as exc:
            raise self._listing_error(exc) from exc

        for repo in repos:
            yield self._to_candidate(repo)

    def _fetch_marker(self, candidate: RepositoryCandidate) -> Optional[Any]:
        return self.client.get_item(candidate.id, "/" + Constants.MARKER_FILE)

    @staticmethod
    def _to_candidate(repo: Dict[str, Any]) -> RepositoryCandidate:
        return RepositoryCandidate(
            name=repo.get("name") or "",
            archived=False,
            default_ref=repo.get("defaultBranch"),
            clone_url=repo.get("sshUrl") or "",
            id=repo.get("id"),
        )
