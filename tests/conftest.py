"""
Pytest configuration and shared fixtures.
"""

import faulthandler
import io

import pytest
from hydra.core.global_hydra import GlobalHydra


# Enable faulthandler only if sys.stderr supports fileno (not always true under pytest-xdist or some CI)
def _safe_enable_faulthandler():
    try:
        faulthandler.enable()
    except (io.UnsupportedOperation, AttributeError):
        pass


_safe_enable_faulthandler()


@pytest.fixture
def clean_hydra():
    """Clear Hydra's global state around a test."""
    GlobalHydra.instance().clear()
    yield
    GlobalHydra.instance().clear()


@pytest.fixture(scope="session")
def anticodon_solutions():
    from rna_assembly.problems import ANTICODON

    return ANTICODON.solve()


@pytest.fixture(scope="session")
def pseudoknot_solutions():
    from rna_assembly.problems import PSEUDOKNOT

    return PSEUDOKNOT.solve()
