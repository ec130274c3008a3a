"""Resolve one declared source into manifest repository records.

Drives the matching provider adapter to completion and applies the
inclusion rules: a candidate is kept only when it is not archived, it is
not named in the source's exclusion list, and its marker file exists.
Every failure here is recoverable: the source or the repository is skipped
and the run goes on.
"""
from __future__ import annotations

import logging
from typing import Callable, List

from common.logging_utils import extra_context, is_debug_enabled, Timer
from repository.errors import ProviderError, ProviderListingError
from repository.models import RepositoryCandidate, RepositoryRecord, SourceDescriptor
from repository.provider_adapters import ProviderAdapter
from repository.providers import create_adapter

logger = logging.getLogger(__name__)

AdapterFactory = Callable[[SourceDescriptor], ProviderAdapter]


def _rejection_reason(source: SourceDescriptor, adapter: ProviderAdapter, candidate: RepositoryCandidate) -> str:
    """Return why a candidate is rejected, or an empty string when it is kept.

    Cheap checks run first so archived or excluded repositories never cost
    a probe call.
    """
    if candidate.archived:
        return "archived"
    if candidate.name in source.exclude:
        return "excluded"
    if not adapter.probe_marker_file(candidate):
        return "no_marker"
    return ""


def resolve(source: SourceDescriptor, adapter_factory: AdapterFactory = create_adapter) -> List[RepositoryRecord]:
    """Enumerate a source and return its records in provider listing order.

    Args:
        source: Declared source descriptor
        adapter_factory: Builds the provider adapter for the source

    Returns:
        Accepted repositories; empty when the source type is unknown, the
        adapter cannot be built, or listing fails at any page.
    """
    with Timer() as t:
        logger.info("Downloading %s repositories for %s", source.kind, source.identifier)
        try:
            adapter = adapter_factory(source)
        except ProviderError as exc:
            logger.error(
                "Could not parse source %s: %s", source.identifier, exc,
                extra=extra_context(
                    event="source_skipped", component="resolver", action="create_adapter",
                    outcome="error", source=source.identifier
                )
            )
            return []

        records: List[RepositoryRecord] = []
        try:
            for candidate in adapter.list_candidates():
                reason = _rejection_reason(source, adapter, candidate)
                if reason:
                    if is_debug_enabled(logger):
                        logger.debug(
                            "Skipping %s from %s: %s", candidate.name, source.identifier, reason,
                            extra=extra_context(
                                event="candidate_rejected", component="resolver", action="resolve",
                                outcome=reason, source=source.identifier, repository=candidate.name
                            )
                        )
                    continue
                records.append(RepositoryRecord.from_candidate(candidate))
        except ProviderListingError as exc:
            logger.error(
                "%s; skipping source", exc,
                extra=extra_context(
                    event="source_skipped", component="resolver", action="list_candidates",
                    outcome="listing_error", source=source.identifier
                )
            )
            return []

        logger.info(
            "Found %d repositories in %s", len(records), source.identifier,
            extra=extra_context(
                event="source_resolved", component="resolver", action="resolve",
                outcome="success", source=source.identifier, count=len(records),
                duration_ms=t.duration_ms()
            )
        )
        return records
