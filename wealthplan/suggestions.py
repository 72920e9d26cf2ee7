"""
Advisory suggestion types and ranking.

Purpose
-------
Defines the ``Suggestion`` record produced by the analyzers
(``analyzers.py``), its loosely-structured ``ActionRequired`` hint, and
the ranking rule applied to the merged list:

    priority rank descending (HIGH=3, MEDIUM=2, LOW=1),
    then confidence descending,
    ties keep analyzer order (stable sort)

Consumers must null-check every ``ActionRequired`` field: which fields are
set depends on the suggestion, not on a fixed schema per type.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .constants import PRIORITY_RANK
from .exceptions import InvalidInputError
from .types import ActionFrequency, Priority, SuggestionType

__all__ = [
    "ActionRequired",
    "Suggestion",
    "rank_suggestions",
    "suggestions_to_dataframe",
]


@dataclass(frozen=True)
class ActionRequired:
    """
    Optional action hint attached to a suggestion.

    Attributes
    ----------
    amount : float, optional
        Monetary amount involved (contribution, coverage gap, new target).
    duration : int, optional
        Duration in years.
    frequency : ActionFrequency, optional
        Cadence of a recurring action.
    percentage : float, optional
        Share of the portfolio to move, in percent.
    action : str, optional
        Free-text instruction.
    """
    amount: Optional[float] = None
    duration: Optional[int] = None
    frequency: Optional[ActionFrequency] = None
    percentage: Optional[float] = None
    action: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Only the fields that are set."""
        data = {k: v for k, v in asdict(self).items() if v is not None}
        if self.frequency is not None:
            data["frequency"] = self.frequency.value
        return data


@dataclass(frozen=True)
class Suggestion:
    id: str
    type: SuggestionType
    priority: Priority
    title: str
    description: str
    impact: str
    action_required: ActionRequired = field(default_factory=ActionRequired)
    reasoning: str = ""
    potential_gain: float = 0.0
    confidence: float = 0.0

    def __post_init__(self):
        if not (0 <= self.confidence <= 100):
            raise InvalidInputError(
                f"confidence must be within [0, 100], got {self.confidence}"
            )

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self.priority.value]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "priority": self.priority.value,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "action_required": self.action_required.to_dict(),
            "reasoning": self.reasoning,
            "potential_gain": self.potential_gain,
            "confidence": self.confidence,
        }


def rank_suggestions(suggestions: Iterable[Suggestion]) -> List[Suggestion]:
    """Sort by priority (HIGH first), then by descending confidence."""
    return sorted(suggestions, key=lambda s: (-s.rank, -s.confidence))


def suggestions_to_dataframe(suggestions: Iterable[Suggestion]) -> pd.DataFrame:
    """Flat table of suggestions (action hint as its free-text part only)."""
    columns = ["type", "priority", "title", "confidence", "potential_gain", "action"]
    rows = [
        {
            "id": s.id,
            "type": s.type.value,
            "priority": s.priority.value,
            "title": s.title,
            "confidence": s.confidence,
            "potential_gain": s.potential_gain,
            "action": s.action_required.action,
        }
        for s in suggestions
    ]
    if not rows:
        return pd.DataFrame(columns=columns, index=pd.Index([], name="id"))
    return pd.DataFrame(rows).set_index("id")[columns]
