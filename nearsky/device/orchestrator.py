"""
NearSky Refresh Orchestrator

Serializes refresh requests into provider chain calls. Flight data is only
fetched on request (button press, CLI keypress), never on a timer.
"""

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..geo import bounding_box
from ..tracking.chain import ProviderChain
from ..tracking.errors import ProviderChainError
from ..tracking.models import RankedResult
from ..tracking.ranking import rank_flights
from .connectivity import ConnectivityMode, ConnectivityStateMachine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplaySnapshot:
    """Everything the display needs for one frame."""

    mode: ConnectivityMode
    flights: RankedResult
    message: str
    last_error: Optional[str] = None
    updated_at: Optional[datetime] = None


class RefreshOrchestrator:
    """
    Single entry point for refreshing flight data.

    A request is dropped when the device is not operational, when it comes
    within the debounce window of the previous accepted request, or when an
    acquisition is already running. A failed acquisition keeps the previous
    result.
    """

    def __init__(
        self,
        config,
        chain: ProviderChain,
        connectivity: ConnectivityStateMachine,
        clock: Callable[[], float] = time.monotonic,
        weather: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            config: NearSky Config, re-read at the start of every cycle
            chain: Provider chain to call
            connectivity: Gate for refreshes
            clock: Monotonic clock in seconds
            weather: Optional weather refresh callable sharing this schedule
        """
        self.config = config
        self.chain = chain
        self.connectivity = connectivity
        self.weather = weather
        self._clock = clock

        self.result = RankedResult()
        self.last_error: Optional[str] = None
        self.last_provider: Optional[str] = None
        self.updated_at: Optional[datetime] = None
        self.in_flight = False
        self.last_request_time: Optional[float] = None
        self.last_weather_refresh: Optional[float] = None
        self._worker: Optional[threading.Thread] = None

    def request_refresh(self, background: bool = False) -> bool:
        """
        Ask for a flight refresh.

        Args:
            background: Run the acquisition on a worker thread instead of
                        blocking the caller

        Returns:
            True if an acquisition was started, False if the request was dropped
        """
        if self.connectivity.mode is not ConnectivityMode.OPERATIONAL:
            logger.debug(
                "Refresh ignored while %s", self.connectivity.mode.value
            )
            return False

        now = self._clock()
        if (
            self.last_request_time is not None
            and now - self.last_request_time < self.config.debounce_seconds
        ):
            logger.debug("Refresh debounced")
            return False

        if self.in_flight:
            logger.debug("Refresh ignored, acquisition already in flight")
            return False

        self.last_request_time = now
        self.in_flight = True

        if background:
            self._worker = threading.Thread(
                target=self._run_cycle, name="nearsky-refresh", daemon=True
            )
            self._worker.start()
        else:
            self._run_cycle()
        return True

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until a background acquisition has finished."""
        if self._worker is not None:
            self._worker.join(timeout)

    def _run_cycle(self) -> None:
        try:
            self._acquire()
        finally:
            self.in_flight = False

    def _acquire(self) -> None:
        home = self.config.home
        box = bounding_box(home, self.config.lat_delta, self.config.lon_delta)
        credentials = self.config.credentials()

        try:
            outcome = self.chain.fetch(box, home, credentials)
        except ProviderChainError as e:
            self.last_error = str(e)
            logger.warning("Refresh failed, keeping previous flights: %s", e)
            return

        self.result = rank_flights(outcome.records, limit=self.config.max_results)
        self.last_error = None
        self.last_provider = outcome.provider
        self.updated_at = datetime.now()
        logger.info(
            "Refreshed from %s: %d of %d flight(s) kept",
            outcome.provider,
            len(self.result),
            len(outcome.records),
        )

    def refresh_weather_if_due(self) -> bool:
        """
        Run the weather callable when its refresh interval has elapsed.

        Returns:
            True if the weather was refreshed
        """
        if self.weather is None or not self.connectivity.is_operational:
            return False

        now = self._clock()
        if (
            self.last_weather_refresh is not None
            and now - self.last_weather_refresh < self.config.weather_interval
        ):
            return False

        try:
            self.weather()
        except Exception as e:
            logger.warning("Weather refresh failed: %s", e)
            return False

        self.last_weather_refresh = now
        return True

    def snapshot(self) -> DisplaySnapshot:
        """Current state for the display."""
        return DisplaySnapshot(
            mode=self.connectivity.mode,
            flights=self.result,
            message=self.result.status_text(),
            last_error=self.last_error,
            updated_at=self.updated_at,
        )
