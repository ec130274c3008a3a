"""Aggregate static and provider-discovered repositories into one ordered list.

Static entries come first in their declared order, then the results of each
source in declaration order. No deduplication is performed.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from common.logging_utils import extra_context
from repository.errors import ConfigurationError
from repository.models import RepositoryRecord, SourceDescriptor
from repository.source_resolver import AdapterFactory, resolve
from repository.providers import create_adapter

logger = logging.getLogger(__name__)


def parse_sources(config: Dict[str, Any]) -> List[SourceDescriptor]:
    """Decode the `sources` list of the input configuration.

    Malformed entries are logged and skipped one by one.

    Raises:
        ConfigurationError: If `sources` is absent, not a list, or empty.
    """
    raw_sources = config.get("sources")
    if not isinstance(raw_sources, list) or not raw_sources:
        raise ConfigurationError("`sources` attribute has to be specified in the input file")

    sources: List[SourceDescriptor] = []
    for index, entry in enumerate(raw_sources):
        result = SourceDescriptor.from_dict(entry)
        if not result.ok:
            logger.error(
                "Could not map source #%d (%s), skipping", index, "; ".join(result.errors),
                extra=extra_context(event="decode", component="aggregator", action="parse_sources", outcome="error")
            )
            continue
        sources.append(result.value)
    return sources


def parse_static_repositories(config: Dict[str, Any]) -> List[RepositoryRecord]:
    """Decode pre-declared `repositories` entries, skipping malformed ones."""
    raw_repositories = config.get("repositories")
    if raw_repositories is None:
        return []
    if not isinstance(raw_repositories, list):
        logger.error("`repositories` attribute is not a list, ignoring static repositories")
        return []

    repositories: List[RepositoryRecord] = []
    for entry in raw_repositories:
        result = RepositoryRecord.from_dict(entry)
        if not result.ok:
            logger.error(
                "Could not map `%s` repository entry (%s), skipping", entry, "; ".join(result.errors),
                extra=extra_context(event="decode", component="aggregator", action="parse_repositories", outcome="error")
            )
            continue
        repositories.append(result.value)
    return repositories


def aggregate(config: Dict[str, Any], adapter_factory: AdapterFactory = create_adapter) -> List[RepositoryRecord]:
    """Build the full ordered repository list for a parsed input configuration.

    Args:
        config: Parsed input configuration object
        adapter_factory: Builds a provider adapter per source

    Returns:
        Static entries, then each source's accepted repositories.

    Raises:
        ConfigurationError: If `sources` is absent or empty.
    """
    sources = parse_sources(config)
    repositories = parse_static_repositories(config)
    if repositories:
        logger.info("Loaded %d static repositories", len(repositories))

    for source in sources:
        repositories.extend(resolve(source, adapter_factory))

    logger.info(
        "Aggregated %d repositories from %d sources", len(repositories), len(sources),
        extra=extra_context(event="aggregate", component="aggregator", action="aggregate",
                            outcome="success", count=len(repositories))
    )
    return repositories
