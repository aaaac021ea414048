from __future__ import annotations

import csv

import pytest

from experiment import GameResult
from strategy import SolverConfig
from tournament import TournamentResults, run_tournament


def test_ranking_and_csv(tmp_path):
    results = TournamentResults()
    results.add("slow", [GameResult("crane", True, 5, 0.1), GameResult("trace", False, 6, 0.1)])
    results.add("fast", [GameResult("crane", True, 3, 0.1), GameResult("trace", True, 4, 0.1)])
    assert [name for name, _ in results.ranking()] == ["fast", "slow"]

    path = tmp_path / "out" / "tournament.csv"
    results.to_csv(path)
    with path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["strategy", "target", "turns", "solved", "seconds"]
    assert len(rows) == 5
    assert rows[1][:4] == ["fast", "crane", "3", "1"]


def test_run_tournament(words, capsys):
    pool = words[:40]
    results = run_tournament(
        pool,
        SolverConfig(seed=1),
        strategies=["random", "frequency"],
        targets=pool[:8],
        max_workers=2,
    )
    assert sorted(results.games) == ["frequency", "random"]
    for games in results.games.values():
        assert [g.target for g in games] == pool[:8]
    results.print_summary()
    out = capsys.readouterr().out
    assert "frequency" in out and "random" in out


def test_plot_histograms(tmp_path):
    pytest.importorskip("matplotlib")
    results = TournamentResults()
    results.add("entropy", [GameResult("crane", True, 3, 0.1), GameResult("trace", False, 6, 0.1)])
    results.add("random", [GameResult("crane", True, 5, 0.1)])
    dest = tmp_path / "hist.png"
    results.plot_histograms(dest)
    assert dest.exists()
