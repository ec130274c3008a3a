"""Azure DevOps API client for project repository listings.

Talks to the Git REST API of a single organization. The organization is
addressed by its full URL (e.g. https://dev.azure.com/acme), so on-premises
Azure DevOps Server collections work the same way.
"""
from __future__ import annotations

from typing import List, Optional, Dict, Any, Tuple
from urllib.parse import quote

from constants import Constants
from common.http_client import get_json, require_json
from repository.errors import ProviderRequestError


class AzureDevOpsClient:
    """Lightweight REST client for Azure DevOps Git operations.

    Personal access tokens are sent with HTTP basic auth and an empty user
    name; an empty token sends no credentials.
    """

    def __init__(self, organization_url: str, token: str = ""):
        """Initialize Azure DevOps client.

        Args:
            organization_url: Organization (or collection) URL
            token: Personal access token, may be empty
        """
        self.organization_url = organization_url.rstrip("/")
        self.token = token

    def _get_auth(self) -> Optional[Tuple[str, str]]:
        """Get basic auth credentials if a token is available."""
        if self.token:
            return ("", self.token)
        return None

    def get_repositories(self, project: str) -> List[Dict[str, Any]]:
        """List every Git repository of a project in a single call.

        Args:
            project: Project name or id

        Returns:
            List of repository dictionaries

        Raises:
            ProviderRequestError: On transport failure or non-2xx status.
        """
        url = (
            f"{self.organization_url}/{quote(project, safe='')}/_apis/git/repositories"
            f"?api-version={Constants.AZURE_DEVOPS_API_VERSION}"
        )
        _, data = require_json(url, context="azdo", auth=self._get_auth())
        repos = data.get("value") if isinstance(data, dict) else None
        if not isinstance(repos, list):
            raise ProviderRequestError(f"azdo returned an unexpected repository listing for project {project}")
        return repos

    def get_item(self, repository_id: str, path: str) -> Optional[Dict[str, Any]]:
        """Fetch item metadata from a repository's default branch.

        Args:
            repository_id: Repository GUID
            path: Item path; a leading slash is added when missing

        Returns:
            Item dictionary (a minimal one when the body is not item
            metadata), or None when the item does not exist

        Raises:
            ProviderRequestError: On transport failure.
        """
        if not path.startswith("/"):
            path = "/" + path
        url = (
            f"{self.organization_url}/_apis/git/repositories/{quote(str(repository_id), safe='')}/items"
            f"?path={quote(path, safe='')}&api-version={Constants.AZURE_DEVOPS_API_VERSION}"
        )
        status, _, data = get_json(
            url, context="azdo", headers={"Accept": "application/json"}, auth=self._get_auth()
        )
        if status != 200:
            return None
        # Some servers answer with the raw file body despite the Accept header
        return data if isinstance(data, dict) and data else {"path": path}
