"""Configuration package exports."""

from .core import get_configuration, print_config_summary
from .model import ServerConfig

__all__ = ["ServerConfig", "get_configuration", "print_config_summary"]
