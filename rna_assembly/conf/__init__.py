"""Structured configuration for the assembly driver."""

from .config_schema import AssemblyConfig, OutputConfig, SearchConfig, register_configs, validate_config
from .utils import get_config, save_config

__all__ = [
    "AssemblyConfig",
    "SearchConfig",
    "OutputConfig",
    "register_configs",
    "validate_config",
    "get_config",
    "save_config",
]
