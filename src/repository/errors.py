"""Exception hierarchy for source aggregation."""


class SatisgenError(Exception):
    """Base class for all errors raised by this project."""


class ConfigurationError(SatisgenError):
    """The input configuration cannot be used (fatal for the run)."""


class ProviderError(SatisgenError):
    """Base class for provider-side failures (recoverable per source)."""


class ProviderRequestError(ProviderError):
    """An HTTP call to a provider failed at the transport level or returned an error status."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


class ProviderListingError(ProviderError):
    """A repository listing call failed; the source contributes nothing."""


class AdapterConfigurationError(ProviderError):
    """An adapter could not be constructed from the source descriptor."""


class UnknownSourceTypeError(ProviderError):
    """The source declares a `sourceType` with no matching adapter."""
