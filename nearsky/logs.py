"""
NearSky Logging Setup
"""

import logging
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(config, level: Optional[str] = None) -> None:
    """
    Configure the root logger from the ``logging`` config section.

    Args:
        config: NearSky Config
        level: Overrides ``logging.level`` when given (e.g. from --verbose)
    """
    level_name = (level or config.get("logging.level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=config.get("logging.format", DEFAULT_FORMAT),
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
