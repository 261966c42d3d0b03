"""
NearSky Connectivity

Tracks whether the device is being set up, joining a network, or
operational. Flight refreshes are only allowed while operational.

    BOOTSTRAPPING --(no saved config)--> ACCESS_POINT_SETUP
    BOOTSTRAPPING --(saved config)-----> CONNECTING_TO_NETWORK
    CONNECTING_TO_NETWORK --(joined)---> OPERATIONAL
    CONNECTING_TO_NETWORK --(max_retries failures)--> ACCESS_POINT_SETUP
    ACCESS_POINT_SETUP --(restart after setup save)--> BOOTSTRAPPING
"""

import logging
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, List, Optional

import requests

logger = logging.getLogger(__name__)


class ConnectivityMode(str, Enum):
    BOOTSTRAPPING = "bootstrapping"
    ACCESS_POINT_SETUP = "access_point_setup"
    CONNECTING_TO_NETWORK = "connecting_to_network"
    OPERATIONAL = "operational"


ModeListener = Callable[[ConnectivityMode, ConnectivityMode], None]


class NetworkLink(ABC):
    """The network hardware or OS service the device joins networks through."""

    @abstractmethod
    def connect(self, ssid: str, password: str) -> None:
        """Start joining a network; completion is observed via is_connected()."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the link currently has connectivity."""

    def disconnect(self) -> None:
        """Leave the current network."""

    def start_access_point(self) -> None:
        """Host the local setup network."""


class HostNetworkLink(NetworkLink):
    """
    Network link for a regular host where the OS manages Wi-Fi.

    Joining is a no-op; connectivity is checked by probing a URL. Any HTTP
    response, whatever its status, counts as connected.
    """

    def __init__(self, probe_url: str, timeout: float = 3.0):
        self.probe_url = probe_url
        self.timeout = timeout

    def connect(self, ssid: str, password: str) -> None:
        logger.debug("Host manages networking; not joining %r", ssid)

    def is_connected(self) -> bool:
        try:
            requests.head(self.probe_url, timeout=self.timeout, allow_redirects=False)
        except requests.exceptions.RequestException as e:
            logger.debug("Connectivity probe to %s failed: %s", self.probe_url, e)
            return False
        return True

    def start_access_point(self) -> None:
        logger.warning(
            "Setup mode requested; edit the configuration file and restart NearSky"
        )


class ConnectivityStateMachine:
    """
    Owns the current ConnectivityMode and the join retry counter.

    Example:
        >>> machine = ConnectivityStateMachine(config, HostNetworkLink(config.probe_url))
        >>> machine.run()
        <ConnectivityMode.OPERATIONAL: 'operational'>
    """

    def __init__(self, config, link: NetworkLink, sleep: Callable[[float], None] = time.sleep):
        """
        Initialize the state machine in BOOTSTRAPPING.

        Args:
            config: NearSky Config (network credentials and retry limits)
            link: Network link used to join and check connectivity
            sleep: Wait function used between link polls
        """
        self.config = config
        self.link = link
        self._sleep = sleep
        self._mode = ConnectivityMode.BOOTSTRAPPING
        self.retry_count = 0
        self._listeners: List[ModeListener] = []

    @property
    def mode(self) -> ConnectivityMode:
        return self._mode

    @property
    def is_operational(self) -> bool:
        return self._mode is ConnectivityMode.OPERATIONAL

    def add_listener(self, listener: ModeListener) -> None:
        """Register a callback invoked as listener(old_mode, new_mode)."""
        self._listeners.append(listener)

    def _transition(self, new_mode: ConnectivityMode) -> None:
        old_mode = self._mode
        if old_mode is new_mode:
            return

        self._mode = new_mode
        logger.info("Connectivity: %s -> %s", old_mode.value, new_mode.value)

        if new_mode is ConnectivityMode.ACCESS_POINT_SETUP:
            self.link.start_access_point()

        for listener in list(self._listeners):
            listener(old_mode, new_mode)

    def boot(self) -> ConnectivityMode:
        """Leave BOOTSTRAPPING based on whether a saved configuration exists."""
        if self._mode is not ConnectivityMode.BOOTSTRAPPING:
            return self._mode

        if self.config.is_persisted:
            self._transition(ConnectivityMode.CONNECTING_TO_NETWORK)
        else:
            logger.info("No saved configuration found")
            self._transition(ConnectivityMode.ACCESS_POINT_SETUP)
        return self._mode

    def attempt_join(self) -> bool:
        """
        Make one network join attempt.

        Polls the link up to ``join_attempts`` times. On success the machine
        becomes OPERATIONAL and the retry counter resets; on failure the
        counter increments and reaching ``max_retries`` falls back to
        ACCESS_POINT_SETUP.

        Returns:
            True if the network was joined
        """
        if self._mode is not ConnectivityMode.CONNECTING_TO_NETWORK:
            raise RuntimeError(f"Cannot join a network while {self._mode.value}")

        ssid = self.config.network_ssid
        logger.info(
            "Joining network %r (attempt %d of %d)",
            ssid,
            self.retry_count + 1,
            self.config.max_retries,
        )
        self.link.connect(ssid, self.config.network_password)

        for _ in range(self.config.join_attempts):
            if self.link.is_connected():
                self.retry_count = 0
                self._transition(ConnectivityMode.OPERATIONAL)
                return True
            self._sleep(self.config.join_interval)

        self.retry_count += 1
        logger.warning(
            "Could not join network %r (%d/%d)",
            ssid,
            self.retry_count,
            self.config.max_retries,
        )
        self.link.disconnect()

        if self.retry_count >= self.config.max_retries:
            self._transition(ConnectivityMode.ACCESS_POINT_SETUP)
        return False

    def run(self) -> ConnectivityMode:
        """Boot and keep joining until OPERATIONAL or ACCESS_POINT_SETUP."""
        self.boot()
        while self._mode is ConnectivityMode.CONNECTING_TO_NETWORK:
            self.attempt_join()
        return self._mode

    def restart(self) -> ConnectivityMode:
        """Start over from BOOTSTRAPPING, e.g. after setup saved a new configuration."""
        logger.info("Restarting connectivity")
        self.retry_count = 0
        self._transition(ConnectivityMode.BOOTSTRAPPING)
        return self.run()

    def notify_link_lost(self) -> Optional[ConnectivityMode]:
        """Drop back to CONNECTING_TO_NETWORK after losing an operational link."""
        if self._mode is not ConnectivityMode.OPERATIONAL:
            return None
        logger.warning("Network link lost")
        self._transition(ConnectivityMode.CONNECTING_TO_NETWORK)
        return self._mode
