"""Shared pytest fixtures for solver tests."""

import json
import random
from pathlib import Path

import pytest

from tile_wfc import compile_rules

RULES_DIR = Path(__file__).resolve().parent.parent / "rules"


# =============================================================================
# Rule Specifications
# =============================================================================

@pytest.fixture
def skatepark_spec() -> dict:
    """The bundled skatepark bowl rules."""
    with open(RULES_DIR / "skatepark.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def skatepark_table(skatepark_spec):
    return compile_rules(skatepark_spec)


@pytest.fixture
def corner_spec() -> dict:
    """
    Four families that only fit together as

        a b
        c d
    """
    return {
        "a": {"symmetry": 1, "right": ["b 0"], "down": ["c 0"]},
        "b": {"symmetry": 1, "left": ["a 0"], "down": ["d 0"]},
        "c": {"symmetry": 1, "up": ["a 0"], "right": ["d 0"]},
        "d": {"symmetry": 1, "up": ["b 0"], "left": ["c 0"]},
    }


@pytest.fixture
def twisted_spec() -> dict:
    """
    Three colours where a right step swaps c0/c1 and a down step swaps c1/c2.
    Every cell stays arc consistent, but no 2x2 block can be filled because
    the two swaps do not commute.
    """
    right = {"c0": "c1", "c1": "c0", "c2": "c2"}
    down = {"c0": "c0", "c1": "c2", "c2": "c1"}
    return {
        name: {"symmetry": 1, "right": [f"{right[name]} 0"], "down": [f"{down[name]} 0"]}
        for name in ("c0", "c1", "c2")
    }


@pytest.fixture
def open_spec() -> dict:
    """Two families that may sit next to anything."""
    everything = ["grass 0", "sand 0"]
    return {
        "grass": {"symmetry": 1, "weight": 3, "up": everything, "right": everything,
                  "down": everything, "left": everything},
        "sand": {"symmetry": 1, "up": everything, "right": everything,
                 "down": everything, "left": everything},
    }


# =============================================================================
# Runtime
# =============================================================================

@pytest.fixture
def rng() -> random.Random:
    """A seeded random source."""
    return random.Random(1234)


@pytest.fixture(scope="session")
def qapp():
    """Qt core application for timer based tests."""
    from PySide6.QtCore import QCoreApplication
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
