# rna_assembly/conf/config_schema.py

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from hydra.core.config_store import ConfigStore
from omegaconf import DictConfig, OmegaConf


@dataclass
class SearchConfig:
    """How the backtracking search is run."""
    max_workers: int = field(
        default=1,
        metadata={"help": "Worker processes for subtree fan-out; 1 runs sequentially"}
    )
    max_solutions: Optional[int] = field(
        default=None,
        metadata={"help": "Stop after this many solutions (sequential search); None enumerates all"}
    )


@dataclass
class OutputConfig:
    """Where results are written. Unset paths are skipped."""
    coordinates_csv: Optional[str] = field(
        default=None,
        metadata={"help": "CSV with one row per atom per solution"}
    )
    structure_path: Optional[str] = field(
        default=None,
        metadata={"help": "PDB (.pdb) or mmCIF (.cif) file for the first solutions"}
    )
    max_models: int = field(
        default=1,
        metadata={"help": "Number of solutions written to structure_path"}
    )


@dataclass
class AssemblyConfig:
    problem: str = field(
        default="pseudoknot",
        metadata={"help": "Built-in problem: pseudoknot or anticodon"}
    )
    custom_problem: Optional[Any] = field(
        default=None,
        metadata={"help": "Inline problem definition (name/steps/constraints); overrides 'problem'"}
    )
    debug_logging: bool = False
    search: SearchConfig = field(default_factory=SearchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def register_configs() -> None:
    """Register all configurations with Hydra's config store for validation."""
    cs = ConfigStore.instance()
    cs.store(name="assembly_config_schema", node=AssemblyConfig)
    cs.store(group="search", name="default", node=SearchConfig)
    cs.store(group="output", name="default", node=OutputConfig)


def validate_config(cfg: Union[dict, DictConfig, AssemblyConfig]) -> None:
    """Validate configuration values.

    Args:
        cfg: A dict, DictConfig or AssemblyConfig instance
    Raises:
        ValueError: If a value is out of range or of the wrong type
    """
    if not OmegaConf.is_config(cfg):
        cfg = OmegaConf.create(cfg) if isinstance(cfg, dict) else OmegaConf.structured(cfg)
    try:
        merged = OmegaConf.merge(OmegaConf.structured(AssemblyConfig), cfg)
    except Exception as e:
        raise ValueError(f"Invalid assembly configuration: {e}") from e

    if merged.custom_problem is None:
        # Imported here to keep the schema importable without the problem registry.
        from rna_assembly.problems import PROBLEMS

        if merged.problem not in PROBLEMS:
            raise ValueError(f"problem must be one of {sorted(PROBLEMS)}, got {merged.problem!r}")
    if merged.search.max_workers < 1:
        raise ValueError(f"search.max_workers must be >= 1, got {merged.search.max_workers}")
    if merged.search.max_solutions is not None and merged.search.max_solutions < 1:
        raise ValueError(f"search.max_solutions must be >= 1, got {merged.search.max_solutions}")
    if merged.output.max_models < 1:
        raise ValueError(f"output.max_models must be >= 1, got {merged.output.max_models}")
