"""Configuration module using Pydantic Settings.

Usage:
    from bindery.config import DiscoverySettings

    settings = DiscoverySettings(json_path="var/discovery.json")
"""

from bindery.config.settings import DiscoverySettings

__all__ = [
    "DiscoverySettings",
]
