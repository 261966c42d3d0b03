"""
NearSky Tracking Errors

FetchError and its subclasses describe why a provider produced no batch.
RecordError never leaves a provider; it marks a single unusable record.
"""

from typing import List, Optional, Tuple


class TrackingError(Exception):
    """Base class for flight acquisition errors."""


class FetchError(TrackingError):
    """A provider could not produce a batch of records."""

    def __init__(self, provider: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.cause = cause


class TransportError(FetchError):
    """No response: connection failure or timeout."""


class StatusError(FetchError):
    """The provider answered with a non-2xx HTTP status."""

    def __init__(self, provider: str, status_code: int, cause: Optional[BaseException] = None):
        super().__init__(provider, f"HTTP {status_code}", cause)
        self.status_code = status_code


class ParseError(FetchError):
    """The payload is not in the expected shape."""


class CredentialMissing(TrackingError):
    """A provider that needs credentials was asked to run without them."""

    def __init__(self, provider: str):
        super().__init__(f"{provider}: no API key configured")
        self.provider = provider


class RecordError(TrackingError):
    """A single record is missing required fields."""


class ProviderChainError(TrackingError):
    """Every provider in the chain failed or was skipped."""

    def __init__(self, errors: List[Tuple[str, TrackingError]]):
        self.errors = list(errors)
        if self.errors:
            detail = "; ".join(str(error) for _, error in self.errors)
        else:
            detail = "no providers configured"
        super().__init__(f"All flight providers failed ({detail})")
