"""Tests for provider adapters: pagination, candidate mapping and marker lookups."""
import pytest
from unittest.mock import Mock

from repository.errors import AdapterConfigurationError, ProviderListingError, ProviderRequestError
from repository.models import RepositoryCandidate
from repository.provider_adapters import (
    AzureDevOpsProviderAdapter,
    GitHubProviderAdapter,
    GitLabProviderAdapter,
    split_azure_identifier,
)


def _github_page(start, count=100):
    return [
        {"id": i, "name": f"repo-{i}", "archived": False, "default_branch": "main",
         "ssh_url": f"git@github.com:acme/repo-{i}.git"}
        for i in range(start, start + count)
    ]


def _gitlab_page(start, count=100):
    return [
        {"id": i, "name": f"proj-{i}", "archived": False, "default_branch": "main",
         "ssh_url_to_repo": f"git@gitlab.com:acme/proj-{i}.git"}
        for i in range(start, start + count)
    ]


def _candidate(**overrides):
    values = dict(name="app", archived=False, default_ref="main", clone_url="git@x:app.git", id=1)
    values.update(overrides)
    return RepositoryCandidate(**values)


class TestGitHubProviderAdapter:
    """Test GitHubProviderAdapter."""

    def test_pagination_stops_after_terminal_page(self):
        mock_client = Mock()
        mock_client.list_org_repos.side_effect = [
            (_github_page(0), True),
            (_github_page(100), True),
            (_github_page(200), True),
            ([], False),
        ]

        adapter = GitHubProviderAdapter("acme", client=mock_client)
        candidates = list(adapter.list_candidates())

        assert len(candidates) == 300
        assert candidates[0].name == "repo-0"
        assert candidates[-1].name == "repo-299"
        pages = [c.args[1] for c in mock_client.list_org_repos.call_args_list]
        assert pages == [1, 2, 3, 4]
        assert all(c.args[2] == 100 for c in mock_client.list_org_repos.call_args_list)

    def test_last_page_without_next_is_kept(self):
        mock_client = Mock()
        mock_client.list_org_repos.side_effect = [
            (_github_page(0), True),
            (_github_page(100, 5), False),
        ]

        candidates = list(GitHubProviderAdapter("acme", client=mock_client).list_candidates())

        assert len(candidates) == 105
        assert mock_client.list_org_repos.call_count == 2

    def test_candidate_mapping(self):
        mock_client = Mock()
        mock_client.list_org_repos.return_value = ([
            {"id": 9, "name": "old", "archived": True, "default_branch": "master",
             "ssh_url": "git@github.com:acme/old.git"},
        ], False)

        (candidate,) = GitHubProviderAdapter("acme", client=mock_client).list_candidates()

        assert candidate == RepositoryCandidate(
            name="old", archived=True, default_ref="master",
            clone_url="git@github.com:acme/old.git", id=9,
        )

    def test_listing_error_aborts_pagination(self):
        mock_client = Mock()
        mock_client.list_org_repos.side_effect = [
            (_github_page(0), True),
            ProviderRequestError("github returned HTTP 502", status_code=502),
        ]

        adapter = GitHubProviderAdapter("acme", client=mock_client)
        with pytest.raises(ProviderListingError, match="page 2"):
            list(adapter.list_candidates())
        assert mock_client.list_org_repos.call_count == 2

    def test_marker_uses_org_and_default_ref(self):
        mock_client = Mock()
        mock_client.get_file_contents.return_value = {"name": "composer.json"}

        adapter = GitHubProviderAdapter("acme", client=mock_client)

        assert adapter.probe_marker_file(_candidate(default_ref="develop")) is True
        mock_client.get_file_contents.assert_called_once_with(
            "acme", "app", "composer.json", ref="develop"
        )

    def test_marker_absent_or_error_is_false(self):
        mock_client = Mock()
        adapter = GitHubProviderAdapter("acme", client=mock_client)

        mock_client.get_file_contents.return_value = None
        assert adapter.probe_marker_file(_candidate()) is False

        mock_client.get_file_contents.side_effect = ProviderRequestError("boom")
        assert adapter.probe_marker_file(_candidate()) is False

    def test_builds_client_from_credential(self):
        adapter = GitHubProviderAdapter("acme", "ghp_token")
        assert adapter.client.token == "ghp_token"
        assert adapter.supports_archival_check is True


class TestGitLabProviderAdapter:
    """Test GitLabProviderAdapter."""

    def test_pagination_stops_at_total_pages(self):
        mock_client = Mock()
        mock_client.list_group_projects.side_effect = [
            (_gitlab_page(0), 1, 3),
            (_gitlab_page(100), 2, 3),
            (_gitlab_page(200), 3, 3),
        ]

        candidates = list(GitLabProviderAdapter("acme", client=mock_client).list_candidates())

        assert len(candidates) == 300
        assert mock_client.list_group_projects.call_count == 3
        first_call = mock_client.list_group_projects.call_args_list[0]
        assert first_call.args == ("acme", 1, 100)
        assert first_call.kwargs == {"include_subgroups": True}

    def test_pagination_stops_on_empty_page(self):
        mock_client = Mock()
        mock_client.list_group_projects.side_effect = [
            (_gitlab_page(0), 1, 4),
            (_gitlab_page(100), 2, 4),
            (_gitlab_page(200), 3, 4),
            ([], 4, 4),
        ]

        candidates = list(GitLabProviderAdapter("acme", client=mock_client).list_candidates())

        assert len(candidates) == 300
        assert mock_client.list_group_projects.call_count == 4

    def test_pagination_without_page_headers_uses_page_size(self):
        mock_client = Mock()
        mock_client.list_group_projects.side_effect = [
            (_gitlab_page(0), None, None),
            (_gitlab_page(100, 40), None, None),
        ]

        candidates = list(GitLabProviderAdapter("acme", client=mock_client).list_candidates())

        assert len(candidates) == 140
        assert mock_client.list_group_projects.call_count == 2

    def test_listing_error_raises_listing_error(self):
        mock_client = Mock()
        mock_client.list_group_projects.side_effect = ProviderRequestError("404")

        with pytest.raises(ProviderListingError):
            list(GitLabProviderAdapter("missing", client=mock_client).list_candidates())

    def test_marker_by_project_id_and_branch(self):
        mock_client = Mock()
        mock_client.get_file.return_value = {"file_name": "composer.json"}

        adapter = GitLabProviderAdapter("acme", client=mock_client)

        assert adapter.probe_marker_file(_candidate(id=42, default_ref="trunk")) is True
        mock_client.get_file.assert_called_once_with(42, "composer.json", "trunk")

    def test_empty_repository_has_no_marker(self):
        mock_client = Mock()

        adapter = GitLabProviderAdapter("acme", client=mock_client)

        assert adapter.probe_marker_file(_candidate(default_ref=None)) is False
        mock_client.get_file.assert_not_called()

    def test_marker_lookup_error_is_false(self):
        mock_client = Mock()
        mock_client.get_file.side_effect = ProviderRequestError("500", status_code=500)

        adapter = GitLabProviderAdapter("acme", client=mock_client)

        assert adapter.probe_marker_file(_candidate(id=42, default_ref="main")) is False
        mock_client.get_file.assert_called_once_with(42, "composer.json", "main")


class TestAzureDevOpsProviderAdapter:
    """Test AzureDevOpsProviderAdapter."""

    def test_split_identifier(self):
        assert split_azure_identifier("https://dev.azure.com/acme/shop") == (
            "https://dev.azure.com/acme", "shop"
        )
        assert split_azure_identifier("https://tfs.example.com/tfs/Default/shop/") == (
            "https://tfs.example.com/tfs/Default", "shop"
        )

    @pytest.mark.parametrize("identifier", ["shop", "/shop", ""])
    def test_malformed_identifier(self, identifier):
        with pytest.raises(AdapterConfigurationError):
            AzureDevOpsProviderAdapter(identifier, client=Mock())

    def test_lists_everything_in_one_call_as_active(self):
        mock_client = Mock()
        mock_client.get_repositories.return_value = [
            {"id": "a1", "name": "app", "sshUrl": "git@ssh.dev.azure.com:v3/acme/shop/app",
             "defaultBranch": "refs/heads/main"},
            {"id": "b2", "name": "lib", "sshUrl": "git@ssh.dev.azure.com:v3/acme/shop/lib"},
        ]

        adapter = AzureDevOpsProviderAdapter("https://dev.azure.com/acme/shop", client=mock_client)
        candidates = list(adapter.list_candidates())

        assert [c.name for c in candidates] == ["app", "lib"]
        assert all(c.archived is False for c in candidates)
        assert adapter.supports_archival_check is False
        mock_client.get_repositories.assert_called_once_with("shop")

    def test_builds_client_for_organization(self):
        adapter = AzureDevOpsProviderAdapter("https://dev.azure.com/acme/shop", "pat")
        assert adapter.client.organization_url == "https://dev.azure.com/acme"
        assert adapter.client.token == "pat"

    def test_listing_error(self):
        mock_client = Mock()
        mock_client.get_repositories.side_effect = ProviderRequestError("401")

        adapter = AzureDevOpsProviderAdapter("https://dev.azure.com/acme/shop", client=mock_client)
        with pytest.raises(ProviderListingError):
            list(adapter.list_candidates())

    def test_marker_missing_by_repository_id(self):
        mock_client = Mock()
        mock_client.get_item.return_value = None

        adapter = AzureDevOpsProviderAdapter("https://dev.azure.com/acme/shop", client=mock_client)

        assert adapter.probe_marker_file(_candidate(id="a1")) is False
        mock_client.get_item.assert_called_once_with("a1", "/composer.json")

    def test_marker_found_by_repository_id(self):
        mock_client = Mock()
        mock_client.get_item.return_value = {"path": "/composer.json"}

        adapter = AzureDevOpsProviderAdapter("https://dev.azure.com/acme/shop", client=mock_client)

        assert adapter.probe_marker_file(_candidate(id="a1")) is True
        mock_client.get_item.assert_called_once_with("a1", "/composer.json")
