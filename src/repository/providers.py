"""Static lookup table from source type to provider adapter."""
from __future__ import annotations

from typing import Dict, Type

from constants import SourceTypes
from repository.errors import UnknownSourceTypeError
from repository.models import SourceDescriptor
from repository.provider_adapters import (
    AzureDevOpsProviderAdapter,
    GitHubProviderAdapter,
    GitLabProviderAdapter,
    ProviderAdapter,
)

PROVIDER_ADAPTERS: Dict[SourceTypes, Type[ProviderAdapter]] = {
    SourceTypes.GITHUB: GitHubProviderAdapter,
    SourceTypes.GITLAB: GitLabProviderAdapter,
    SourceTypes.AZDO: AzureDevOpsProviderAdapter,
}


def map_kind_to_type(kind: str) -> SourceTypes:
    """Map a `sourceType` string to its enum member (exact match).

    Raises:
        UnknownSourceTypeError: If no provider handles this kind.
    """
    try:
        return SourceTypes(kind)
    except ValueError as exc:
        raise UnknownSourceTypeError(f"unknown source type {kind!r}") from exc


def create_adapter(source: SourceDescriptor) -> ProviderAdapter:
    """Build the adapter for a source, with its auth context from the credential.

    Raises:
        UnknownSourceTypeError: If the source type is not supported.
        AdapterConfigurationError: If the identifier is unusable for that provider.
    """
    adapter_cls = PROVIDER_ADAPTERS[map_kind_to_type(source.kind)]
    return adapter_cls(source.identifier, source.credential)
