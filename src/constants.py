"""Constants used in the project."""

import os
from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONFIG_ERROR = 4


class SourceTypes(Enum):
    """Source providers supported by the program.

    Args:
        Enum (string): Value of `sourceType` in the input file.
    """

    GITHUB = "github"
    GITLAB = "gitlab"
    AZDO = "azdo"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    VERSION = "1.0.0"
    DEFAULT_INPUT_FILE = "input.json"
    DEFAULT_OUTPUT_FILE = "satis.json"
    MARKER_FILE = "composer.json"
    REPOSITORY_TYPE = "git"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "SATISGEN_LOG_LEVEL"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    # Repository API constants
    GITHUB_API_BASE = "https://api.github.com"
    GITLAB_API_BASE = "https://gitlab.com/api/v4"
    AZURE_DEVOPS_API_VERSION = "6.0"
    ENV_GITHUB_API_BASE = "SATISGEN_GITHUB_API_BASE"
    ENV_GITLAB_API_BASE = "SATISGEN_GITLAB_API_BASE"
    REPO_API_PER_PAGE = 100


def apply_env_overrides() -> None:
    """Apply API base URL overrides from the environment (self-hosted providers)."""
    github_base = os.environ.get(Constants.ENV_GITHUB_API_BASE, "").strip()
    if github_base:
        Constants.GITHUB_API_BASE = github_base.rstrip("/")
    gitlab_base = os.environ.get(Constants.ENV_GITLAB_API_BASE, "").strip()
    if gitlab_base:
        Constants.GITLAB_API_BASE = gitlab_base.rstrip("/")
