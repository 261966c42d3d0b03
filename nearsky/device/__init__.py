"""
NearSky Device Component

Connectivity state and refresh orchestration.

Main Classes:
    - ConnectivityStateMachine: Setup / joining / operational modes
    - HostNetworkLink: Network link for hosts where the OS owns Wi-Fi
    - RefreshOrchestrator: Gated, serialized flight refreshes

Example:
    >>> from nearsky import Config
    >>> from nearsky.device import ConnectivityStateMachine, HostNetworkLink, RefreshOrchestrator
    >>> from nearsky.tracking import ProviderChain
    >>> config = Config('config.yaml')
    >>> machine = ConnectivityStateMachine(config, HostNetworkLink(config.probe_url))
    >>> machine.run()
    >>> orchestrator = RefreshOrchestrator(config, ProviderChain.default(config), machine)
    >>> orchestrator.request_refresh()
"""

from .connectivity import (
    ConnectivityMode,
    ConnectivityStateMachine,
    HostNetworkLink,
    NetworkLink,
)
from .orchestrator import DisplaySnapshot, RefreshOrchestrator

__all__ = [
    "ConnectivityMode",
    "ConnectivityStateMachine",
    "NetworkLink",
    "HostNetworkLink",
    "RefreshOrchestrator",
    "DisplaySnapshot",
]
