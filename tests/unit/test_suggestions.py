"""
Unit tests for suggestions.py and advisor.py modules.

Tests the Suggestion record, ranking, and the end-to-end suggestion engine.
"""

import pytest

from wealthplan.advisor import compute_suggestions, generate_suggestions
from wealthplan.config import AdvisoryConfig
from wealthplan.exceptions import InvalidInputError, NotFoundError
from wealthplan.models import Client, ClientSnapshot
from wealthplan.repository import InMemoryRepository
from wealthplan.suggestions import (
    ActionRequired,
    Suggestion,
    rank_suggestions,
    suggestions_to_dataframe,
)
from wealthplan.types import ActionFrequency, Priority, SuggestionType


def _suggestion(id, priority, confidence):
    return Suggestion(
        id=id,
        type=SuggestionType.REBALANCING,
        priority=priority,
        title=id,
        description="",
        impact="",
        confidence=confidence,
    )


# ============================================================================
# SUGGESTION RECORD TESTS
# ============================================================================

class TestSuggestion:

    def test_confidence_range(self):
        with pytest.raises(InvalidInputError, match="confidence"):
            _suggestion("s", Priority.LOW, 101)

    def test_rank(self):
        assert _suggestion("s", Priority.HIGH, 0).rank == 3
        assert _suggestion("s", Priority.LOW, 0).rank == 1

    def test_action_to_dict_drops_unset(self):
        action = ActionRequired(amount=1_000, frequency=ActionFrequency.MONTHLY)
        assert action.to_dict() == {"amount": 1_000, "frequency": "MONTHLY"}
        assert ActionRequired().to_dict() == {}

    def test_to_dict(self):
        data = _suggestion("s-1", Priority.MEDIUM, 70).to_dict()
        assert data["type"] == "REBALANCING"
        assert data["priority"] == "MEDIUM"
        assert data["action_required"] == {}
        assert data["confidence"] == 70


# ============================================================================
# RANKING TESTS
# ============================================================================

class TestRankSuggestions:

    def test_priority_then_confidence(self):
        ranked = rank_suggestions([
            _suggestion("low-90", Priority.LOW, 90),
            _suggestion("high-10", Priority.HIGH, 10),
            _suggestion("med-50", Priority.MEDIUM, 50),
            _suggestion("med-80", Priority.MEDIUM, 80),
        ])
        assert [s.id for s in ranked] == ["high-10", "med-80", "med-50", "low-90"]

    def test_stable_for_full_ties(self):
        ranked = rank_suggestions([
            _suggestion("a", Priority.LOW, 50),
            _suggestion("b", Priority.LOW, 50),
        ])
        assert [s.id for s in ranked] == ["a", "b"]

    def test_dataframe(self):
        df = suggestions_to_dataframe([_suggestion("s-1", Priority.HIGH, 75)])
        assert df.loc["s-1", "priority"] == "HIGH"
        assert suggestions_to_dataframe([]).empty


# ============================================================================
# ENGINE TESTS
# ============================================================================

class TestComputeSuggestions:

    def test_full_ranking(self, repository, as_of):
        suggestions = compute_suggestions(repository, "c-1", as_of=as_of)
        assert [s.id for s in suggestions] == [
            "rebalancing_c-1",
            "insurance_c-1",
            "goal_adjustment_g-house",
            "tax_optimization_c-1",
            "goal_expansion_g-retire",
        ]

    def test_custom_config(self, repository, as_of):
        config = AdvisoryConfig(coverage_age_limit=30, tax_age_limit=30)
        ids = [s.id for s in compute_suggestions(repository, "c-1", config, as_of)]
        assert "insurance_c-1" not in ids
        assert "tax_optimization_c-1" not in ids

    def test_client_without_records(self):
        snapshot = ClientSnapshot(client=Client("c-9", "Bo", 70))
        assert generate_suggestions(snapshot) == []

    def test_unknown_client(self):
        with pytest.raises(NotFoundError):
            compute_suggestions(InMemoryRepository(), "ghost")
