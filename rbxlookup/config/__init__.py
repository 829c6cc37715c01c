"""Configuration module: exports Settings and load_config."""

from rbxlookup.config.loader import load_config
from rbxlookup.config.settings import Settings

__all__ = ["Settings", "load_config"]
