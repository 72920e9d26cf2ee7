"""
Suggestion engine entry point.

Loads one consistent client snapshot, runs the four analyzers over it
and returns the merged list ranked by ``suggestions.rank_suggestions``.

Example
-------
>>> from wealthplan.advisor import compute_suggestions
>>> for s in compute_suggestions(repo, "c-1"):
...     print(s.priority.value, s.title)
HIGH Portfolio rebalancing needed
MEDIUM Insufficient insurance coverage
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from .analyzers import analyze_goals, analyze_portfolio, analyze_risk, analyze_tax
from .config import AdvisoryConfig
from .models import ClientSnapshot
from .repository import ClientRepository, load_snapshot
from .suggestions import Suggestion, rank_suggestions

logger = logging.getLogger(__name__)

__all__ = [
    "generate_suggestions",
    "compute_suggestions",
]


def generate_suggestions(
    snapshot: ClientSnapshot,
    config: Optional[AdvisoryConfig] = None,
    as_of: Optional[date] = None,
) -> List[Suggestion]:
    """Run every analyzer over *snapshot* and rank the merged output."""
    config = config or AdvisoryConfig()
    merged: List[Suggestion] = []
    merged.extend(analyze_portfolio(snapshot, config))
    merged.extend(analyze_goals(snapshot, config, as_of))
    merged.extend(analyze_risk(snapshot, config))
    merged.extend(analyze_tax(snapshot, config))
    logger.debug("Client %s: %d suggestions", snapshot.client.id, len(merged))
    return rank_suggestions(merged)


def compute_suggestions(
    repository: ClientRepository,
    client_id: str,
    config: Optional[AdvisoryConfig] = None,
    as_of: Optional[date] = None,
) -> List[Suggestion]:
    """
    Ranked advisory suggestions for one client.

    Raises
    ------
    NotFoundError
        If the client does not exist.
    """
    snapshot = load_snapshot(repository, client_id)
    return generate_suggestions(snapshot, config, as_of)
