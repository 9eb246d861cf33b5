"""Utilities for Hydra configuration management."""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

import hydra
from omegaconf import DictConfig, OmegaConf

from .config_schema import AssemblyConfig, register_configs, validate_config


def get_config(config_dir: Optional[str] = None,
               config_name: str = "default",
               overrides: Optional[list] = None) -> DictConfig:
    """Compose the configuration without going through ``@hydra.main``.

    Args:
        config_dir: Absolute path to the config directory; defaults to this package
        config_name: Name of the config file to use (without .yaml)
        overrides: List of Hydra overrides (e.g. ["search.max_workers=4"])

    Returns:
        Loaded and validated configuration object
    """
    if config_dir is None:
        config_dir = str(Path(__file__).parent)

    register_configs()
    with hydra.initialize_config_dir(version_base=None, config_dir=config_dir):
        cfg = hydra.compose(config_name=config_name, overrides=overrides or [])

    validate_config(cfg)
    return cfg


def save_config(config: Union[AssemblyConfig, DictConfig, Mapping[str, Any]],
                save_path: Union[str, Path],
                resolve: bool = True) -> Path:
    """Write ``config`` as YAML, creating parent directories, and return the path.

    The config is validated first, so a saved file always composes back
    into the schema.
    """
    path = Path(save_path)
    node = config if OmegaConf.is_config(config) else OmegaConf.structured(config)
    validate_config(node)
    if resolve:
        node = OmegaConf.create(OmegaConf.to_container(node, resolve=True))
    path.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(config=node, f=path)
    return path
