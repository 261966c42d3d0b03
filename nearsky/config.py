"""
NearSky Configuration Management

This module provides configuration management for the NearSky flight tracker.
It includes tracking defaults and runtime configuration loaded from YAML files.
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml

from .geo import GeoPoint
from .tracking.constants import AEROAPI_SEARCH_URL, OPENSKY_STATES_URL, PROBE_URL
from .tracking.models import ProviderCredentials

logger = logging.getLogger(__name__)

# =============================================================================
# Tracking Settings
# =============================================================================


class Settings:
    """Defaults for flight acquisition, connectivity and refresh behaviour."""

    # --- Acquisition ---
    DEFAULT_LAT_DELTA: float = 0.45  # Half-height of the query box (deg, ~50 km)
    DEFAULT_LON_DELTA: float = 0.45  # Half-width of the query box (deg)
    MAX_RESULTS: int = 3  # Flights kept for display
    API_TIMEOUT_SECONDS: int = 10  # Per-request connect/read timeout

    # --- Refresh ---
    DEBOUNCE_MS: int = 200  # Refresh requests closer than this are dropped
    WEATHER_REFRESH_SECONDS: int = 900  # Weather collaborator refresh period

    # --- Connectivity ---
    MAX_RETRIES: int = 3  # Failed joins before falling back to setup mode
    JOIN_ATTEMPTS: int = 40  # Link polls per join attempt
    JOIN_INTERVAL_SECONDS: float = 0.25  # Wait between link polls

    # --- Endpoints ---
    AEROAPI_SEARCH_URL: str = AEROAPI_SEARCH_URL
    OPENSKY_STATES_URL: str = OPENSKY_STATES_URL
    PROBE_URL: str = PROBE_URL


# =============================================================================
# Runtime Configuration
# =============================================================================


class Config:
    """
    Runtime configuration manager for NearSky.

    Loads settings from YAML files or uses sensible defaults.
    Provides property-based access to common settings.

    Example:
        >>> config = Config('config.yaml')
        >>> print(f"Watching the sky over {config.location_name}")
        >>> print(f"Home: {config.home_latitude}, {config.home_longitude}")
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file. If None or missing,
                        uses default configuration.
        """
        self.config_path = config_path
        self.is_persisted = False
        self._config: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file or return defaults.

        Values present in the file override the defaults section by section.

        Returns:
            Configuration dictionary
        """
        if self.config_path is None or not os.path.exists(self.config_path):
            return self._get_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not load config file %s: %s", self.config_path, e)
            return self._get_default_config()

        if not self._validate_config(config):
            logger.warning(
                "Invalid config structure in %s, using defaults", self.config_path
            )
            return self._get_default_config()

        self.is_persisted = True
        return self._merge_defaults(config)

    def _validate_config(self, config: Any) -> bool:
        """
        Validate configuration structure and required fields.

        Args:
            config: Parsed YAML document

        Returns:
            True if valid, False otherwise
        """
        try:
            # Required: location section
            assert isinstance(config, dict)
            assert "location" in config
            assert isinstance(config["location"]["latitude"], (float, int))
            assert isinstance(config["location"]["longitude"], (float, int))
            assert -90 <= config["location"]["latitude"] <= 90
            assert -180 <= config["location"]["longitude"] <= 180

            # Optional: query box deltas must be positive
            tracking = config.get("tracking") or {}
            for key in ("lat_delta", "lon_delta"):
                if key in tracking:
                    assert isinstance(tracking[key], (float, int))
                    assert tracking[key] > 0

            return True
        except (AssertionError, KeyError, TypeError):
            return False

    def _merge_defaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        merged = self._get_default_config()
        for section, values in config.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(values)
            else:
                merged[section] = values
        return merged

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration.

        Returns:
            Default configuration dictionary
        """
        return {
            "location": {
                "latitude": 42.3601,
                "longitude": -71.0589,
                "name": "Boston, MA",
            },
            "tracking": {
                "lat_delta": Settings.DEFAULT_LAT_DELTA,
                "lon_delta": Settings.DEFAULT_LON_DELTA,
                "max_results": Settings.MAX_RESULTS,
                "debounce_ms": Settings.DEBOUNCE_MS,
            },
            "api": {
                "primary_key": "",  # AeroAPI key, empty skips the primary provider
                "primary_url": Settings.AEROAPI_SEARCH_URL,
                "fallback_url": Settings.OPENSKY_STATES_URL,
                "timeout_seconds": Settings.API_TIMEOUT_SECONDS,
            },
            "network": {
                "ssid": "",
                "password": "",
                "max_retries": Settings.MAX_RETRIES,
                "join_attempts": Settings.JOIN_ATTEMPTS,
                "join_interval_seconds": Settings.JOIN_INTERVAL_SECONDS,
                "probe_url": Settings.PROBE_URL,
            },
            "weather": {
                "refresh_interval_seconds": Settings.WEATHER_REFRESH_SECONDS,
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        }

    def save_config(self) -> None:
        """
        Save current configuration to YAML file.

        Raises:
            ValueError: If config_path is not set
        """
        if self.config_path is None:
            raise ValueError("Cannot save config: no config_path specified")

        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self._config, f, default_flow_style=False)

        self.is_persisted = True
        logger.info("Configuration saved to %s", self.config_path)

    # --- Property Accessors ---

    @property
    def home_latitude(self) -> float:
        """Get home location latitude in degrees."""
        return float(self._config["location"]["latitude"])

    @property
    def home_longitude(self) -> float:
        """Get home location longitude in degrees."""
        return float(self._config["location"]["longitude"])

    @property
    def home(self) -> GeoPoint:
        """Get home location as a GeoPoint."""
        return GeoPoint(self.home_latitude, self.home_longitude)

    @property
    def location_name(self) -> str:
        """Get descriptive location name."""
        return self._config["location"].get("name", "Unknown Location")

    @property
    def lat_delta(self) -> float:
        return float(self.get("tracking.lat_delta", Settings.DEFAULT_LAT_DELTA))

    @property
    def lon_delta(self) -> float:
        return float(self.get("tracking.lon_delta", Settings.DEFAULT_LON_DELTA))

    @property
    def max_results(self) -> int:
        """Get number of flights to keep, never more than Settings.MAX_RESULTS."""
        return min(
            int(self.get("tracking.max_results", Settings.MAX_RESULTS)),
            Settings.MAX_RESULTS,
        )

    @property
    def debounce_seconds(self) -> float:
        """Get refresh debounce window in seconds."""
        return int(self.get("tracking.debounce_ms", Settings.DEBOUNCE_MS)) / 1000.0

    @property
    def primary_api_key(self) -> str:
        """Get primary provider API key (empty string when not configured)."""
        return str(self.get("api.primary_key", "") or "").strip()

    @property
    def primary_api_url(self) -> str:
        return self.get("api.primary_url", Settings.AEROAPI_SEARCH_URL)

    @property
    def fallback_api_url(self) -> str:
        return self.get("api.fallback_url", Settings.OPENSKY_STATES_URL)

    @property
    def api_timeout(self) -> int:
        """Get API request timeout in seconds."""
        return int(self.get("api.timeout_seconds", Settings.API_TIMEOUT_SECONDS))

    @property
    def network_ssid(self) -> str:
        return str(self.get("network.ssid", "") or "")

    @property
    def network_password(self) -> str:
        return str(self.get("network.password", "") or "")

    @property
    def max_retries(self) -> int:
        return int(self.get("network.max_retries", Settings.MAX_RETRIES))

    @property
    def join_attempts(self) -> int:
        return int(self.get("network.join_attempts", Settings.JOIN_ATTEMPTS))

    @property
    def join_interval(self) -> float:
        return float(
            self.get("network.join_interval_seconds", Settings.JOIN_INTERVAL_SECONDS)
        )

    @property
    def probe_url(self) -> str:
        return self.get("network.probe_url", Settings.PROBE_URL)

    @property
    def weather_interval(self) -> int:
        """Get weather refresh interval in seconds."""
        return int(
            self.get(
                "weather.refresh_interval_seconds", Settings.WEATHER_REFRESH_SECONDS
            )
        )

    def credentials(self) -> ProviderCredentials:
        """Snapshot of the provider credentials for one acquisition cycle."""
        return ProviderCredentials(primary_api_key=self.primary_api_key)

    # --- Generic Accessors ---

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'location.latitude')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get('tracking.lat_delta', 0.45)
            0.45
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'location.latitude')
            value: Value to set

        Example:
            >>> config.set('api.primary_key', 'abc123')
        """
        keys = key.split(".")
        config = self._config

        # Navigate to parent of target key
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
