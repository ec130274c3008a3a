"""GitHub API client for organization repository listings.

Provides a lightweight REST client for listing an organization's
repositories page by page and fetching file contents from a repository.
"""
from __future__ import annotations

from typing import List, Optional, Dict, Any, Tuple
from urllib.parse import quote

from requests.utils import parse_header_links

from constants import Constants
from common.http_client import get_json, require_json
from repository.errors import ProviderRequestError


class GitHubClient:
    """Lightweight REST client for GitHub API operations.

    An empty token means unauthenticated access (public repositories only,
    lower rate limit).
    """

    def __init__(self, token: str = "", base_url: Optional[str] = None):
        """Initialize GitHub client.

        Args:
            token: GitHub token sent as a bearer credential, may be empty
            base_url: Base URL for GitHub API (defaults to Constants.GITHUB_API_BASE)
        """
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip("/")
        self.token = token

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {'Accept': 'application/vnd.github+json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def list_org_repos(
        self,
        org: str,
        page: int,
        per_page: int = Constants.REPO_API_PER_PAGE,
    ) -> Tuple[List[Dict[str, Any]], bool]:
        """Fetch one page of organization repositories.

        Args:
            org: Organization login
            page: 1-based page number
            per_page: Page size

        Returns:
            Tuple of (repositories, has_next_page)

        Raises:
            ProviderRequestError: On transport failure or non-2xx status.
        """
        url = f"{self.base_url}/orgs/{quote(org, safe='')}/repos?per_page={per_page}&page={page}"
        headers, data = require_json(url, context="github", headers=self._get_headers())
        if not isinstance(data, list):
            raise ProviderRequestError(f"github returned an unexpected repository listing for {org}")
        return data, self._has_next_page(headers)

    def get_file_contents(
        self,
        owner: str,
        repo: str,
        path: str,
        ref: Optional[str] = None,
    ) -> Optional[Any]:
        """Fetch file contents metadata.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path inside the repository
            ref: Optional branch/tag/commit; the default branch when omitted

        Returns:
            Contents payload, or None when the file does not exist

        Raises:
            ProviderRequestError: On transport failure.
        """
        url = (
            f"{self.base_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"
            f"/contents/{quote(path)}"
        )
        if ref:
            url = f"{url}?ref={quote(ref, safe='')}"
        status, _, data = get_json(url, context="github", headers=self._get_headers())
        if status == 200 and data:
            return data
        return None

    @staticmethod
    def _has_next_page(headers: Dict[str, str]) -> bool:
        """Return True when the Link header advertises a rel="next" page."""
        link = headers.get('link')
        if not link:
            return False
        return any(entry.get('rel') == 'next' for entry in parse_header_links(link))
