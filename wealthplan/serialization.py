"""
Serialization module for WealthPlan.

Purpose
-------
JSON persistence around the planning core:

- Client documents: load a client's records (wallets, goals, events,
  insurance) from JSON into an ``InMemoryRepository``. Used by the CLI
  and by fixtures.
- Projection runs: save a completed projection as a named, versioned
  JSON snapshot and load it back. Versions increase per client.

Client document format
----------------------
Either a single client object or ``{"clients": [...]}``::

    {
      "schema_version": "0.1.0",
      "clients": [
        {
          "id": "c-1", "name": "Ana", "age": 35,
          "wallets":   [{"id": "w-1", "asset_class": "STOCKS",
                         "current_value": 250000, "description": ""}],
          "goals":     [{"id": "g-1", "name": "House", "target_value": 400000,
                         "target_date": "2032-06-01", "current_value": 50000}],
          "events":    [{"id": "e-1", "event_type": "INCOME", "value": 1000,
                         "frequency": "MONTHLY", "start_date": "2025-01-01",
                         "end_date": "2030-12-31"}],
          "insurance": [{"id": "i-1", "insurance_type": "LIFE",
                         "coverage": 500000}]
        }
      ]
    }

Nested records inherit ``client_id`` from their parent. Dates are ISO
8601 strings.

Example
-------
>>> from pathlib import Path
>>> from wealthplan.serialization import load_repository, save_projection
>>> repo = load_repository(Path("clients.json"))
>>> result = compute_projection(repo, params)
>>> save_projection(result, Path("runs"), name="Base case")
PosixPath('runs/c-1_v001.json')
"""

from __future__ import annotations

import glob
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import ProjectionParameters
from .constants import SCHEMA_VERSION
from .events import AppliedEvent
from .exceptions import ConfigurationError, InvalidInputError
from .models import Client, Event, Goal, Insurance, Wallet
from .projection import ProjectionResult, ProjectionSummary, ProjectionYearResult
from .repository import InMemoryRepository
from .types import EventType

logger = logging.getLogger(__name__)

__all__ = [
    "load_repository",
    "repository_from_dict",
    "projection_to_dict",
    "projection_from_dict",
    "save_projection",
    "load_projection",
    "next_projection_version",
]


def _date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


# ---------------------------------------------------------------------------
# Client documents
# ---------------------------------------------------------------------------

def _wallet_from_dict(data: Dict[str, Any], client_id: str) -> Wallet:
    return Wallet(
        id=str(data["id"]),
        client_id=client_id,
        asset_class=data["asset_class"],
        current_value=float(data["current_value"]),
        percentage=float(data.get("percentage", 0.0)),
        description=data.get("description") or "",
    )


def _goal_from_dict(data: Dict[str, Any], client_id: str) -> Goal:
    return Goal(
        id=str(data["id"]),
        client_id=client_id,
        name=data.get("name", ""),
        target_value=float(data["target_value"]),
        target_date=_date(data["target_date"]),
        current_value=float(data.get("current_value", 0.0)),
        goal_type=data.get("goal_type", "OTHER"),
        monthly_income=data.get("monthly_income"),
    )


def _event_from_dict(data: Dict[str, Any], client_id: str) -> Event:
    return Event(
        id=str(data["id"]),
        client_id=client_id,
        event_type=data["event_type"],
        value=float(data["value"]),
        frequency=data["frequency"],
        start_date=_date(data["start_date"]),
        end_date=_date(data.get("end_date")),
        name=data.get("name", ""),
        description=data.get("description") or "",
    )


def _insurance_from_dict(data: Dict[str, Any], client_id: str) -> Insurance:
    return Insurance(
        id=str(data["id"]),
        client_id=client_id,
        insurance_type=data.get("insurance_type", "LIFE"),
        coverage=float(data.get("coverage", 0.0)),
        premium=float(data.get("premium", 0.0)),
        premium_frequency=data.get("premium_frequency", "MONTHLY"),
    )


def repository_from_dict(payload: Dict[str, Any]) -> InMemoryRepository:
    """
    Build an InMemoryRepository from a client document.

    Raises
    ------
    ConfigurationError
        If a record is missing required fields or fails validation.
    """
    documents = payload.get("clients", [payload])
    clients: List[Client] = []
    wallets: List[Wallet] = []
    goals: List[Goal] = []
    events: List[Event] = []
    insurance: List[Insurance] = []
    try:
        for doc in documents:
            client_id = str(doc["id"])
            clients.append(Client(
                id=client_id,
                name=doc.get("name", ""),
                age=int(doc["age"]),
                total_wealth=float(doc.get("total_wealth", 0.0)),
            ))
            wallets += [_wallet_from_dict(d, client_id) for d in doc.get("wallets", [])]
            goals += [_goal_from_dict(d, client_id) for d in doc.get("goals", [])]
            events += [_event_from_dict(d, client_id) for d in doc.get("events", [])]
            insurance += [_insurance_from_dict(d, client_id) for d in doc.get("insurance", [])]
    except KeyError as e:
        raise ConfigurationError(f"Missing required field {e} in client document") from e
    except (TypeError, ValueError, InvalidInputError) as e:
        raise ConfigurationError(f"Invalid client document: {e}") from e

    return InMemoryRepository(
        clients=clients,
        wallets=wallets,
        goals=goals,
        events=events,
        insurance=insurance,
    )


def load_repository(path: Path) -> InMemoryRepository:
    """Load a client document from a JSON file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path} is not valid JSON: {e}") from e
    return repository_from_dict(payload)


# ---------------------------------------------------------------------------
# Projection runs
# ---------------------------------------------------------------------------

def projection_to_dict(
    result: ProjectionResult,
    name: str = "",
    description: Optional[str] = None,
    version: Optional[int] = None,
) -> Dict[str, Any]:
    return {
        "schema_version": SCHEMA_VERSION,
        "client_id": result.parameters.client_id,
        "name": name,
        "description": description,
        "version": version,
        "created_at": result.created_at.isoformat(),
        "parameters": result.parameters.model_dump(),
        "projections": [y.to_dict() for y in result.years],
        "summary": result.summary.to_dict(),
    }


def projection_from_dict(payload: Dict[str, Any]) -> ProjectionResult:
    """
    Rebuild a ProjectionResult from ``projection_to_dict`` output.

    Raises
    ------
    ConfigurationError
        On an unsupported schema version or malformed payload.
    """
    version = payload.get("schema_version")
    if version != SCHEMA_VERSION:
        raise ConfigurationError(
            f"Unsupported schema version {version!r} (expected {SCHEMA_VERSION})"
        )
    try:
        years = tuple(
            ProjectionYearResult(
                year=int(y["year"]),
                start_value=float(y["start_value"]),
                end_value=float(y["end_value"]),
                contribution=float(y["contribution"]),
                withdrawal=float(y["withdrawal"]),
                growth=float(y["growth"]),
                events=tuple(
                    AppliedEvent(EventType(e["type"]), float(e["value"]), e.get("description", ""))
                    for e in y.get("events", [])
                ),
                total_goal_progress=float(y.get("total_goal_progress", 0.0)),
            )
            for y in payload["projections"]
        )
        return ProjectionResult(
            parameters=ProjectionParameters.model_validate(payload["parameters"]),
            years=years,
            summary=ProjectionSummary(**payload["summary"]),
            created_at=date.fromisoformat(payload["created_at"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Malformed projection document: {e}") from e


def next_projection_version(directory: Path, client_id: str) -> int:
    """
    Last saved version for *client_id* in *directory* plus one (1 if none).

    Only documents whose stored ``client_id`` equals *client_id* count, so
    ids sharing a prefix (``a`` and ``a_v``) keep separate version
    sequences. Unreadable documents are skipped with a warning.
    """
    directory = Path(directory)
    last = 0
    if directory.is_dir():
        for path in directory.glob(f"{glob.escape(client_id)}_v*.json"):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    payload = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning("Ignoring unreadable projection %s: %s", path, e)
                continue
            if not isinstance(payload, dict) or payload.get("client_id") != client_id:
                continue
            try:
                last = max(last, int(payload.get("version") or 0))
            except (TypeError, ValueError):
                logger.warning(
                    "Ignoring projection %s: invalid version %r", path, payload.get("version")
                )
    return last + 1


def save_projection(
    result: ProjectionResult,
    directory: Path,
    name: str,
    description: Optional[str] = None,
) -> Path:
    """
    Save *result* as the next version for its client.

    An existing file is never overwritten; the version is bumped past any
    file already occupying the name.

    Returns
    -------
    Path
        ``<directory>/<client_id>_vNNN.json``.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    client_id = result.parameters.client_id
    version = next_projection_version(directory, client_id)
    path = directory / f"{client_id}_v{version:03d}.json"
    while path.exists():
        version += 1
        path = directory / f"{client_id}_v{version:03d}.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(projection_to_dict(result, name, description, version), f, indent=2)
    logger.info("Saved projection %r for %s as version %d", name, client_id, version)
    return path


def load_projection(path: Path) -> ProjectionResult:
    with open(Path(path), "r", encoding="utf-8") as f:
        return projection_from_dict(json.load(f))
