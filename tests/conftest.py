from __future__ import annotations

import pytest

from candidates import CandidateSet
from lexicon import load_words
from solver import Solver
from strategies.entropy_strat import EntropyStrategy
from strategy import SolverConfig


@pytest.fixture(scope="session")
def words() -> list[str]:
    return load_words()


@pytest.fixture(scope="session")
def dictionary(words) -> CandidateSet:
    return CandidateSet(words)


@pytest.fixture(scope="session")
def solver(dictionary) -> Solver:
    """Entropy solver over the bundled list, ignoring any opener table on disk."""
    config = SolverConfig()
    return Solver(dictionary, config, strategy=EntropyStrategy(config, openers={}))
