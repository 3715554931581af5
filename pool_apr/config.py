"""
Configuration settings for pool APR ranking

Loads environment variables and provides benchmark configuration.
The pool denylist lives in a YAML file (network -> addresses) and is passed
into the ranking functions explicitly.
"""
import os
from typing import Dict, List, Optional

import yaml
from dotenv import load_dotenv

from .constants import DEFAULT_DEPOSIT_USD, DEFAULT_MIN_VOLUME_USD, VOLATILITY_WINDOW_DAYS

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Application settings"""

    # Benchmark deposit (USD) used for every pool
    DEPOSIT_USD: float = float(os.getenv("POOL_APR_DEPOSIT_USD", DEFAULT_DEPOSIT_USD))

    # Pools below this volume are not ranked
    MIN_VOLUME_USD: float = float(os.getenv("POOL_APR_MIN_VOLUME_USD", DEFAULT_MIN_VOLUME_USD))

    # Number of day-candles averaged into the volatility band
    VOLATILITY_WINDOW: int = int(os.getenv("POOL_APR_VOLATILITY_WINDOW", VOLATILITY_WINDOW_DAYS))

    # YAML file with hidden pool addresses per network
    DENYLIST_PATH: Optional[str] = os.getenv("POOL_APR_DENYLIST_PATH") or None

    LOG_LEVEL: str = os.getenv("POOL_APR_LOG_LEVEL", "INFO").upper()

    def load_denylist(self) -> Dict[str, List[str]]:
        """Load the configured denylist (empty when no path is set)"""
        if not self.DENYLIST_PATH:
            return {}
        return load_denylist(self.DENYLIST_PATH)


def load_denylist(path: str) -> Dict[str, List[str]]:
    """Load a network -> [pool addresses] mapping from YAML

    Example file:
        ethereum:
          - "0x86d257cdb7bc9c0df10e84c8709697f92770b335"
        polygon: []

    Raises:
        ValueError: the file is not a mapping of lists
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Denylist must be a mapping of network -> addresses: {path}")

    denylist: Dict[str, List[str]] = {}
    for network, addresses in data.items():
        if addresses is None:
            addresses = []
        if not isinstance(addresses, list):
            raise ValueError(f"Denylist entry for {network!r} must be a list: {path}")
        denylist[str(network).lower()] = [str(a).lower() for a in addresses]

    return denylist


# Create global settings instance
settings = Settings()
