"""Configuration management."""

from .config import Config
from .global_config import GlobalConfig

__all__ = ["Config", "GlobalConfig"]
