"""
Shared pytest fixtures for pairing engine tests.

Running tests:
    pytest tests/                  - full suite
    pytest tests/ -m "not slow"   - skip the exhaustive player-count sweeps
"""
import random
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pairings.models import Player


def build_players(count, prefix="P"):
    """Players P1..Pn in seed order."""
    return [Player(id=f"{prefix}{i}", seed=i) for i in range(1, count + 1)]


@pytest.fixture
def make_players():
    """Factory fixture returning `count` players in seed order."""
    return build_players


@pytest.fixture
def four_players():
    return build_players(4)


@pytest.fixture
def eight_players():
    return build_players(8)


@pytest.fixture
def rng():
    """Seeded generator so Swiss pairings are reproducible."""
    return random.Random(1234)


@pytest.fixture
def swiss_field():
    """Eight players after two rounds: two on 6 points, four on 3, two on 0."""
    return [
        Player(id="A", match_points=6, opponents=["E", "C"]),
        Player(id="B", match_points=6, opponents=["F", "D"]),
        Player(id="C", match_points=3, opponents=["G", "A"]),
        Player(id="D", match_points=3, opponents=["H", "B"]),
        Player(id="E", match_points=3, opponents=["A", "G"]),
        Player(id="F", match_points=3, opponents=["B", "H"]),
        Player(id="G", match_points=0, opponents=["C", "E"]),
        Player(id="H", match_points=0, opponents=["D", "F"]),
    ]
