"""
NearSky Command Line Interface

Usage:
    nearsky [--config CONFIG_FILE] [--once] [--background] [--verbose]
"""

import argparse
import sys
from typing import Callable, List, Optional

from .config import Config
from .device import (
    ConnectivityMode,
    ConnectivityStateMachine,
    HostNetworkLink,
    RefreshOrchestrator,
)
from .logs import setup_logging
from .tracking import FlightRecord, ProviderChain, RankedResult
from .utils import format_altitude, format_distance, format_route, format_speed

EXIT_SETUP_REQUIRED = 2


def format_flight(rank: int, flight: FlightRecord) -> str:
    """One console line per flight."""
    label = flight.callsign or "UNKNOWN"
    line = (
        f"  {rank}. ✈️  {label:8s} | {format_distance(flight.distance_km):>8s} | "
        f"{format_altitude(flight.altitude_ft):>9s} | "
        f"{format_speed(flight.ground_speed_kmh):>9s}"
    )

    details = [d for d in (flight.airline, flight.aircraft_type) if d]
    route = format_route(flight.origin_code, flight.destination_code)
    if route:
        details.append(route)
    if details:
        line += " | " + " · ".join(details)
    return line


def print_header(config: Config) -> None:
    """Print tracker header information."""
    print("\n" + "=" * 70)
    print("🛩️  NearSky - Nearest Aircraft Tracker")
    print("=" * 70)
    print(f"Location:   {config.home_latitude}, {config.home_longitude}, {config.location_name}")
    print(f"Box:        ±{config.lat_delta}° lat, ±{config.lon_delta}° lon")

    if config.primary_api_key:
        print("Providers:  AeroAPI, OpenSky (fallback)")
    else:
        print("Providers:  OpenSky (no AeroAPI key configured)")

    print("=" * 70)


def print_result(result: RankedResult, orchestrator: RefreshOrchestrator) -> None:
    """Print the ranked flights, or why there are none."""
    if orchestrator.last_error:
        print(f"⚠️  {orchestrator.last_error}")
        if not result.is_empty:
            print("   Showing previous flights")

    if result.is_empty:
        print(f"   {result.status_text()}")
        return

    source = orchestrator.last_provider or "unknown"
    print(f"Nearest flights (via {source}):")
    for rank, flight in enumerate(result, start=1):
        print(format_flight(rank, flight))


def print_setup_help(config: Config) -> None:
    print("\n📡 Setup required: no saved configuration, or the network could not be joined.")
    if config.config_path:
        print(f"   Edit {config.config_path} (location, api, network) and run again.")
    else:
        print("   Create a config file with --config and run again.")


def interactive_loop(
    orchestrator: RefreshOrchestrator,
    background: bool = False,
    read_line: Callable[[], str] = input,
) -> None:
    """Refresh on Enter, quit on 'q' or end of input."""
    print("\n🔄 Press Enter to refresh, q to quit\n")

    while True:
        try:
            command = read_line().strip().lower()
        except EOFError:
            break

        if command in ("q", "quit", "exit"):
            break

        orchestrator.refresh_weather_if_due()
        if orchestrator.request_refresh(background=background):
            orchestrator.wait()
            print_result(orchestrator.result, orchestrator)
        elif orchestrator.connectivity.mode is not ConnectivityMode.OPERATIONAL:
            print(f"   Offline ({orchestrator.connectivity.mode.value})")
        else:
            print("   Refresh skipped")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the tracker."""
    parser = argparse.ArgumentParser(
        description="NearSky - Show the aircraft closest to your location"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)",
    )
    parser.add_argument(
        "--once", action="store_true", help="Refresh once, print and exit"
    )
    parser.add_argument(
        "--background",
        action="store_true",
        help="Run acquisitions on a worker thread",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    config = Config(args.config)
    setup_logging(config, level="DEBUG" if args.verbose else None)

    print_header(config)

    machine = ConnectivityStateMachine(config, HostNetworkLink(config.probe_url))
    mode = machine.run()
    if mode is ConnectivityMode.ACCESS_POINT_SETUP:
        print_setup_help(config)
        return EXIT_SETUP_REQUIRED

    orchestrator = RefreshOrchestrator(config, ProviderChain.default(config), machine)

    try:
        if args.once:
            orchestrator.request_refresh(background=args.background)
            orchestrator.wait()
            print_result(orchestrator.result, orchestrator)
            return 0 if orchestrator.last_error is None else 1

        interactive_loop(orchestrator, background=args.background)
    except KeyboardInterrupt:
        pass

    print("\n👋 NearSky stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
