"""
Integration tests for the complete WealthPlan workflow.

Load client document → recalculate portfolio → project → save/load run →
plan goals → rank suggestions → rebalance.
"""

import json

import pytest

from wealthplan import (
    AdvisoryConfig,
    compute_projection,
    compute_suggestions,
    plan_goal_contribution,
)
from wealthplan.portfolio import rebalance_plan, recalculate_portfolio
from wealthplan.projection import projection_parameters_for_client
from wealthplan.repository import load_snapshot
from wealthplan.serialization import load_projection, load_repository, save_projection
from wealthplan.types import Priority


@pytest.fixture
def document_path(tmp_path, client_document):
    path = tmp_path / "clients.json"
    path.write_text(json.dumps(client_document))
    return path


class TestFullWorkflow:

    def test_document_to_advice(self, document_path, tmp_path, as_of):
        repo = load_repository(document_path)
        snapshot = load_snapshot(repo, "c-1")

        recalculated = recalculate_portfolio(snapshot.wallets, snapshot.client)
        assert recalculated.client.total_wealth == 100_000
        assert sum(w.percentage for w in recalculated.wallets) == pytest.approx(100)

        params = projection_parameters_for_client(
            repo, "c-1", start_year=2025, end_year=2045
        )
        result = compute_projection(repo, params)
        assert len(result) == 21
        assert result.summary.total_contributions == 24_000
        assert result.summary.final_wealth > result.summary.initial_wealth
        df = result.to_dataframe()
        assert (df["end_value"] >= 0).all()

        path = save_projection(result, tmp_path / "runs", "Base")
        assert load_projection(path).summary == result.summary

        plan = plan_goal_contribution(repo, "c-1", "g-house", as_of=as_of)
        assert not plan.achievable

        suggestions = compute_suggestions(repo, "c-1", AdvisoryConfig(), as_of=as_of)
        assert suggestions[0].priority is Priority.HIGH
        ranks = [s.rank for s in suggestions]
        assert ranks == sorted(ranks, reverse=True)

        trades = rebalance_plan(snapshot.wallets, {"STOCKS": 50, "BONDS": 40, "CASH": 10})
        assert sum(t.difference for t in trades) == pytest.approx(0)

    def test_projection_without_goals_or_events(self, client):
        from wealthplan.repository import InMemoryRepository
        from wealthplan.models import Wallet

        repo = InMemoryRepository(
            clients=[client], wallets=[Wallet("w-1", "c-1", "BONDS", 50_000)]
        )
        params = projection_parameters_for_client(
            repo, "c-1", real_rate=0.0, start_year=2025, end_year=2034
        )
        result = compute_projection(repo, params)
        assert all(y.end_value == 50_000 for y in result)
        assert all(y.total_goal_progress == 0 for y in result)
        assert compute_suggestions(repo, "c-1")[0].id == "rebalancing_c-1"
