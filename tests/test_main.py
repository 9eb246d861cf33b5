"""End-to-end tests for the command line driver."""

import logging
import sys

import pandas as pd
import pytest
from omegaconf import OmegaConf

from rna_assembly.conf import get_config
from rna_assembly.main import (
    collect_solutions,
    ensure_logger_visible,
    main,
    resolve_problem,
    run_assembly,
    set_logger_level,
)
from rna_assembly.problems import ANTICODON


@pytest.fixture
def anticodon_cfg(clean_hydra):
    # Plain copy so tests can merge in keys the struct-mode config would refuse.
    return OmegaConf.create(OmegaConf.to_container(get_config(overrides=["problem=anticodon"])))


def test_resolve_builtin_problem(anticodon_cfg):
    assert resolve_problem(anticodon_cfg) is ANTICODON


def test_resolve_custom_problem(anticodon_cfg):
    cfg = OmegaConf.merge(
        anticodon_cfg,
        {
            "custom_problem": {
                "name": "duplex",
                "steps": [
                    {"relation": "reference", "target": 1, "template": "rG"},
                    {"relation": "wc", "target": 2, "template": "rC", "reference": 1},
                ],
            }
        },
    )
    problem = resolve_problem(cfg)
    assert problem.name == "duplex"
    assert run_assembly(cfg)["solutions"] == 1


def test_collect_solutions_honours_max_solutions(anticodon_cfg):
    cfg = OmegaConf.merge(anticodon_cfg, {"search": {"max_solutions": 4}})
    assert len(collect_solutions(ANTICODON, cfg)) == 4


def test_run_assembly_writes_outputs(anticodon_cfg, tmp_path, anticodon_solutions):
    csv_path = tmp_path / "coords.csv"
    pdb_path = tmp_path / "models" / "loop.pdb"
    cfg = OmegaConf.merge(
        anticodon_cfg,
        {"output": {"coordinates_csv": str(csv_path), "structure_path": str(pdb_path), "max_models": 2}},
    )
    summary = run_assembly(cfg)

    assert summary["problem"] == "anticodon"
    assert summary["solutions"] == len(anticodon_solutions)
    assert summary["residues"] == 17
    assert summary["most_distant_atom"] == pytest.approx(32.8890, abs=2e-4)
    assert summary["structure_path"] == str(pdb_path)

    df = pd.read_csv(csv_path)
    assert df["solution"].nunique() == len(anticodon_solutions)
    assert pdb_path.read_text().count("MODEL") == 2


def test_run_assembly_without_solutions(anticodon_cfg, tmp_path, caplog):
    cfg = OmegaConf.merge(
        anticodon_cfg,
        {
            "custom_problem": {
                "name": "impossible",
                "steps": [
                    {"relation": "reference", "target": 1, "template": "rG"},
                    {"relation": "wc", "target": 2, "template": "rC", "reference": 1},
                ],
                "constraints": [{"target": 2, "partner": 1, "max_distance": 0.1}],
            },
            "output": {"coordinates_csv": str(tmp_path / "none.csv")},
        },
    )
    with caplog.at_level(logging.WARNING, logger="rna_assembly"):
        summary = run_assembly(cfg)
    assert summary == {"solutions": 0, "problem": "impossible"}
    assert not (tmp_path / "none.csv").exists()
    assert "No assignment satisfies" in caplog.text


def test_run_assembly_parallel(anticodon_cfg, anticodon_solutions):
    cfg = OmegaConf.merge(anticodon_cfg, {"search": {"max_workers": 2}})
    assert run_assembly(cfg)["solutions"] == len(anticodon_solutions)


@pytest.mark.parametrize("debug", [True, False])
def test_debug_logging_controls_search_messages(anticodon_cfg, caplog, debug):
    cfg = OmegaConf.merge(anticodon_cfg, {"debug_logging": debug, "search": {"max_solutions": 1}})
    caplog.set_level(logging.DEBUG)
    try:
        run_assembly(cfg)
    finally:
        set_logger_level(False)
    debug_records = [r for r in caplog.records if r.levelno == logging.DEBUG and r.name.startswith("rna_assembly")]
    assert bool(debug_records) is debug


def test_invalid_config_is_rejected(anticodon_cfg):
    cfg = OmegaConf.merge(anticodon_cfg, {"search": {"max_workers": 0}})
    with pytest.raises(ValueError):
        run_assembly(cfg)


def test_hydra_entry_point(clean_hydra, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        sys, "argv", ["rna-assembly", "problem=anticodon", "search.max_solutions=2", "hydra.run.dir=."]
    )
    main()
    captured = capsys.readouterr()
    assert "solutions: 2" in captured.out
    assert "problem: anticodon" in captured.out
    # Only the root console handler prints driver records.
    assert (captured.out + captured.err).count("Found 2 solution(s)") == 1


def test_ensure_logger_visible_defers_to_root_handler():
    package_logger = logging.getLogger("rna_assembly")
    root = logging.getLogger()
    root_handler = logging.NullHandler()
    before = list(package_logger.handlers)
    root.addHandler(root_handler)
    try:
        ensure_logger_visible()
        assert package_logger.handlers == before
        assert package_logger.propagate
    finally:
        root.removeHandler(root_handler)
