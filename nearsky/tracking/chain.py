"""
NearSky Provider Chain
Tries providers in preference order until one returns a batch.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from ..geo import BoundingBox, GeoPoint
from .errors import CredentialMissing, FetchError, ProviderChainError, TrackingError
from .models import FlightRecord, ProviderCredentials
from .providers import AeroApiProvider, FlightProvider, OpenSkyProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainResult:
    """Records from the first provider that succeeded."""

    provider: str
    records: Tuple[FlightRecord, ...]


class ProviderChain:
    """
    Ordered fallback across flight providers.

    A provider that succeeds ends the cycle, even with zero records. A
    provider that fails, or lacks credentials, hands over to the next one.
    There is no retry beyond the provider list itself.
    """

    def __init__(self, providers: Iterable[FlightProvider]):
        self.providers: List[FlightProvider] = list(providers)

    @classmethod
    def default(cls, config) -> "ProviderChain":
        """AeroAPI first, then OpenSky, using endpoints from ``config``."""
        return cls(
            [
                AeroApiProvider(config.primary_api_url, timeout=config.api_timeout),
                OpenSkyProvider(config.fallback_api_url, timeout=config.api_timeout),
            ]
        )

    def fetch(
        self, box: BoundingBox, home: GeoPoint, credentials: ProviderCredentials
    ) -> ChainResult:
        """
        Fetch flights from the first provider that answers.

        Raises:
            ProviderChainError: If every provider failed or was skipped
        """
        errors: List[Tuple[str, TrackingError]] = []

        for provider in self.providers:
            if not provider.is_available(credentials):
                logger.info("Skipping %s: no API key configured", provider.name)
                errors.append((provider.name, CredentialMissing(provider.name)))
                continue

            try:
                records = provider.fetch(box, home, credentials)
            except FetchError as e:
                logger.warning("Provider %s failed: %s", provider.name, e)
                errors.append((provider.name, e))
                continue

            return ChainResult(provider=provider.name, records=tuple(records))

        raise ProviderChainError(errors)
