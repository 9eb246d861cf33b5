"""Tests for the structured configuration and its validation."""

from pathlib import Path

import pytest
from hydra.core.config_store import ConfigStore
from omegaconf import OmegaConf

from rna_assembly.conf import (
    AssemblyConfig,
    SearchConfig,
    get_config,
    register_configs,
    save_config,
    validate_config,
)

CONF_DIR = Path(__file__).parent.parent / "rna_assembly" / "conf"


def test_default_yaml_exists():
    assert (CONF_DIR / "default.yaml").is_file()


def test_get_config_defaults(clean_hydra):
    cfg = get_config()
    assert cfg.problem == "pseudoknot"
    assert cfg.custom_problem is None
    assert cfg.debug_logging is False
    assert cfg.search.max_workers == 1
    assert cfg.search.max_solutions is None
    assert cfg.output.structure_path is None
    assert cfg.output.max_models == 1


def test_get_config_overrides(clean_hydra):
    cfg = get_config(overrides=["problem=anticodon", "search.max_workers=4", "debug_logging=true"])
    assert cfg.problem == "anticodon"
    assert cfg.search.max_workers == 4
    assert cfg.debug_logging is True


def test_get_config_rejects_bad_values(clean_hydra):
    with pytest.raises(ValueError):
        get_config(overrides=["problem=hairpin"])


def test_schema_type_checks_overrides(clean_hydra):
    # The schema node makes Hydra reject non-integers before validation.
    with pytest.raises(Exception):
        get_config(overrides=["search.max_workers=many"])


def test_register_configs():
    register_configs()
    repo = ConfigStore.instance().repo
    assert "assembly_config_schema.yaml" in repo
    assert "default.yaml" in repo["search"]


@pytest.mark.parametrize(
    "cfg",
    [
        {"problem": "hairpin"},
        {"search": {"max_workers": 0}},
        {"search": {"max_solutions": 0}},
        {"output": {"max_models": 0}},
        {"search": {"max_workers": "several"}},
    ],
)
def test_validate_config_rejects(cfg):
    with pytest.raises(ValueError):
        validate_config(cfg)


def test_validate_config_accepts():
    validate_config({})
    validate_config(AssemblyConfig(problem="anticodon", search=SearchConfig(max_workers=2)))
    validate_config(OmegaConf.create({"problem": "anticodon", "output": {"max_models": 5}}))


def test_custom_problem_skips_name_check():
    validate_config({"problem": "unused", "custom_problem": {"name": "x", "steps": []}})


def test_save_config_round_trip(tmp_path):
    target = tmp_path / "nested" / "config.yaml"
    assert save_config(AssemblyConfig(problem="anticodon"), str(target)) == target
    loaded = OmegaConf.load(target)
    assert loaded.problem == "anticodon"
    assert loaded.search.max_workers == 1


def test_save_config_resolves_and_validates(tmp_path):
    cfg = OmegaConf.create(
        {"problem": "anticodon", "search": {"max_workers": 2, "max_solutions": "${search.max_workers}"}}
    )
    path = save_config(cfg, tmp_path / "resolved.yaml")
    assert OmegaConf.load(path).search.max_solutions == 2

    with pytest.raises(ValueError):
        save_config({"search": {"max_workers": 0}}, tmp_path / "bad.yaml")
    assert not (tmp_path / "bad.yaml").exists()
