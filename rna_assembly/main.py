"""
main.py - Command line driver for rna_assembly.

Solves one problem (built-in or inline in the config), reports the number of
solutions and the most distant atom, and optionally writes coordinates.

Usage:
    python -m rna_assembly.main problem=anticodon search.max_workers=4
"""

import logging
from typing import Any, Dict, List

import hydra
from omegaconf import DictConfig, OmegaConf
from tqdm import tqdm

from rna_assembly.analysis import save_structure, solutions_to_frame, summarize
from rna_assembly.conf.config_schema import register_configs, validate_config
from rna_assembly.placement.variables import Assignment
from rna_assembly.problems import Problem, get_problem, problem_from_mapping

logger = logging.getLogger("rna_assembly")

register_configs()


def set_logger_level(debug_logging: bool) -> None:
    """Set the package logger level according to the debug_logging flag."""
    level = logging.DEBUG if debug_logging else logging.INFO
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def ensure_logger_visible() -> None:
    """Attach an INFO StreamHandler when no handler would show package records.

    Under ``@hydra.main`` the root logger already carries Hydra's console
    handler, and records reach it by propagation.
    """
    if logger.handlers or logging.getLogger().handlers:
        return
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "[%(asctime)s][%(name)s][%(levelname)s] - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def resolve_problem(cfg: DictConfig) -> Problem:
    if cfg.get("custom_problem") is not None:
        return problem_from_mapping(cfg.custom_problem)
    return get_problem(cfg.problem)


def collect_solutions(problem: Problem, cfg: DictConfig) -> List[Assignment]:
    """Run the search as configured; the sequential path streams with a progress bar."""
    search_cfg = cfg.search
    if search_cfg.max_workers > 1 and search_cfg.max_solutions is None:
        return problem.solve(max_workers=search_cfg.max_workers)

    solutions = []
    stream = problem.iter_solutions()
    for solution in tqdm(stream, desc=f"{problem.name} solutions", unit="sol", disable=None):
        solutions.append(solution)
        if search_cfg.max_solutions is not None and len(solutions) >= search_cfg.max_solutions:
            break
    return solutions


def run_assembly(cfg: DictConfig) -> Dict[str, Any]:
    """Solve the configured problem and write the requested outputs."""
    validate_config(cfg)
    set_logger_level(cfg.debug_logging)

    problem = resolve_problem(cfg)
    logger.info("Assembling %s (%d domains)", problem.name, len(problem.steps))
    solutions = collect_solutions(problem, cfg)

    summary = summarize(solutions)
    summary["problem"] = problem.name
    logger.info("Found %d solution(s) for %s", summary["solutions"], problem.name)
    if solutions:
        logger.info("Most distant atom: %.4f A", summary["most_distant_atom"])
    else:
        logger.warning("No assignment satisfies the constraints of %s", problem.name)

    out = cfg.output
    if solutions and out.coordinates_csv:
        solutions_to_frame(solutions).to_csv(out.coordinates_csv, index=False)
        logger.info("Wrote coordinates to %s", out.coordinates_csv)
        summary["coordinates_csv"] = out.coordinates_csv
    if solutions and out.structure_path:
        summary["structure_path"] = str(save_structure(solutions[: out.max_models], out.structure_path))
    return summary


@hydra.main(version_base=None, config_path="conf", config_name="default")
def main(cfg: DictConfig) -> None:
    """
    Main entry point for rna_assembly.

    Args:
        cfg: The configuration object loaded by Hydra
    """
    ensure_logger_visible()
    set_logger_level(cfg.debug_logging)
    if cfg.debug_logging:
        logger.debug("Configuration:\n%s", OmegaConf.to_yaml(cfg))
    summary = run_assembly(cfg)
    for key, value in summary.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
