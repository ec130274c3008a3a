"""GitLab API client for group project listings.

Provides a lightweight REST client for listing the projects of a group
(including subgroups) page by page and probing for a file in a project.
"""
from __future__ import annotations

from typing import List, Optional, Dict, Any, Tuple
from urllib.parse import quote

from constants import Constants
from common.http_client import get_json, require_json
from repository.errors import ProviderRequestError


class GitLabClient:
    """Lightweight REST client for GitLab API operations.

    An empty token means anonymous access, which only sees public projects.
    """

    def __init__(self, token: str = "", base_url: Optional[str] = None):
        """Initialize GitLab client.

        Args:
            token: GitLab personal access token, may be empty
            base_url: Base URL for GitLab API (defaults to Constants.GITLAB_API_BASE)
        """
        self.base_url = (base_url or Constants.GITLAB_API_BASE).rstrip("/")
        self.token = token

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {}
        if self.token:
            headers['PRIVATE-TOKEN'] = self.token
        return headers

    def list_group_projects(
        self,
        group: str,
        page: int,
        per_page: int = Constants.REPO_API_PER_PAGE,
        include_subgroups: bool = True,
    ) -> Tuple[List[Dict[str, Any]], Optional[int], Optional[int]]:
        """Fetch one page of group projects.

        Args:
            group: Group id or full path (e.g. "acme/php")
            page: 1-based page number
            per_page: Page size
            include_subgroups: Also list projects of nested subgroups

        Returns:
            Tuple of (projects, current_page, total_pages). The page numbers
            come from the x-page / x-total-pages headers and are None when
            GitLab omits them (it does so for very large collections).

        Raises:
            ProviderRequestError: On transport failure or non-2xx status.
        """
        group_path = quote(group, safe='')
        url = (
            f"{self.base_url}/groups/{group_path}/projects"
            f"?include_subgroups={'true' if include_subgroups else 'false'}"
            f"&per_page={per_page}&page={page}"
        )
        headers, data = require_json(url, context="gitlab", headers=self._get_headers())
        if not isinstance(data, list):
            raise ProviderRequestError(f"gitlab returned an unexpected project listing for group {group}")

        current_page = self._get_current_page(headers)
        total_pages = self._get_total_pages(headers)
        if total_pages is None and current_page is not None and not headers.get('x-next-page'):
            # No total advertised and no further page: this one is the last.
            total_pages = current_page
        return data, current_page, total_pages

    def get_file(self, project_id: Any, path: str, ref: str) -> Optional[Dict[str, Any]]:
        """Fetch file metadata from a project's repository.

        Args:
            project_id: Numeric project id
            path: File path inside the repository
            ref: Branch, tag or commit to read from

        Returns:
            File dictionary, or None when the file does not exist

        Raises:
            ProviderRequestError: On transport failure.
        """
        file_path = quote(path, safe='')
        url = (
            f"{self.base_url}/projects/{quote(str(project_id), safe='')}"
            f"/repository/files/{file_path}?ref={quote(ref, safe='')}"
        )
        status, _, data = get_json(url, context="gitlab", headers=self._get_headers())
        if status == 200 and data:
            return data
        return None

    def _get_current_page(self, headers: Dict[str, str]) -> Optional[int]:
        """Extract current page from response headers.

        Args:
            headers: Response headers

        Returns:
            Current page number or None
        """
        page_str = headers.get('x-page')
        if page_str:
            try:
                return int(page_str)
            except ValueError:
                pass
        return None

    def _get_total_pages(self, headers: Dict[str, str]) -> Optional[int]:
        """Extract total pages from response headers.

        Args:
            headers: Response headers

        Returns:
            Total pages or None
        """
        total_str = headers.get('x-total-pages')
        if total_str:
            try:
                return int(total_str)
            except ValueError:
                pass
        return None
