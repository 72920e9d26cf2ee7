"""
Record-store interface for WealthPlan.

Purpose
-------
The engines never talk to a database directly. They read through a
``ClientRepository``, an abstract collaborator exposing the five reads
the planning core needs. Storage backends (ORM, REST client, fixtures)
implement it; ``InMemoryRepository`` is the reference implementation used
by the CLI and the tests.

Snapshot semantics
------------------
``load_snapshot`` performs all reads for one client once and freezes them
into a ``ClientSnapshot``. Every engine call takes exactly one snapshot
and there is no caching across calls, so each call observes the current
state of the store.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from .exceptions import NotFoundError
from .models import Client, ClientSnapshot, Event, Goal, Insurance, Wallet

logger = logging.getLogger(__name__)

__all__ = [
    "ClientRepository",
    "InMemoryRepository",
    "load_snapshot",
    "require_client",
]


class ClientRepository(ABC):
    """Read interface over persisted client records."""

    @abstractmethod
    def get_client(self, client_id: str) -> Optional[Client]:
        """Return the client, or None when it does not exist."""

    @abstractmethod
    def get_goals_for_client(self, client_id: str) -> Sequence[Goal]:
        ...

    @abstractmethod
    def get_events_for_client(self, client_id: str) -> Sequence[Event]:
        ...

    @abstractmethod
    def get_wallets_for_client(self, client_id: str) -> Sequence[Wallet]:
        ...

    @abstractmethod
    def get_insurance_for_client(self, client_id: str) -> Sequence[Insurance]:
        ...


class InMemoryRepository(ClientRepository):
    """
    Dictionary-backed repository.

    Parameters
    ----------
    clients : Iterable[Client]
    wallets, goals, events, insurance : Iterable
        Records of any client; grouped by ``client_id`` on construction.

    Examples
    --------
    >>> repo = InMemoryRepository(clients=[Client("c1", "Ana", 35)])
    >>> repo.get_client("c1").name
    'Ana'
    >>> repo.get_goals_for_client("c1")
    []
    """

    def __init__(
        self,
        clients: Iterable[Client] = (),
        wallets: Iterable[Wallet] = (),
        goals: Iterable[Goal] = (),
        events: Iterable[Event] = (),
        insurance: Iterable[Insurance] = (),
    ):
        self._clients: Dict[str, Client] = {c.id: c for c in clients}
        self._wallets = self._group(wallets)
        self._goals = self._group(goals)
        self._events = self._group(events)
        self._insurance = self._group(insurance)

    @staticmethod
    def _group(records) -> Dict[str, List]:
        grouped: Dict[str, List] = defaultdict(list)
        for record in records:
            grouped[record.client_id].append(record)
        return grouped

    def add_client(self, client: Client) -> None:
        self._clients[client.id] = client

    def get_client(self, client_id: str) -> Optional[Client]:
        return self._clients.get(client_id)

    def get_goals_for_client(self, client_id: str) -> List[Goal]:
        return list(self._goals.get(client_id, []))

    def get_events_for_client(self, client_id: str) -> List[Event]:
        return list(self._events.get(client_id, []))

    def get_wallets_for_client(self, client_id: str) -> List[Wallet]:
        return list(self._wallets.get(client_id, []))

    def get_insurance_for_client(self, client_id: str) -> List[Insurance]:
        return list(self._insurance.get(client_id, []))

    def client_ids(self) -> List[str]:
        return list(self._clients)


def require_client(repository: ClientRepository, client_id: str) -> Client:
    """Fetch a client or raise NotFoundError."""
    client = repository.get_client(client_id)
    if client is None:
        raise NotFoundError(f"Client {client_id!r} not found")
    return client


def load_snapshot(repository: ClientRepository, client_id: str) -> ClientSnapshot:
    """
    Read one client and all of its records.

    Goals are ordered by target date; other collections keep the
    repository's order.

    Raises
    ------
    NotFoundError
        If the client does not exist.
    """
    client = require_client(repository, client_id)
    snapshot = ClientSnapshot(
        client=client,
        wallets=tuple(repository.get_wallets_for_client(client_id)),
        goals=tuple(sorted(
            repository.get_goals_for_client(client_id),
            key=lambda g: g.target_date,
        )),
        events=tuple(repository.get_events_for_client(client_id)),
        insurance=tuple(repository.get_insurance_for_client(client_id)),
    )
    logger.debug(
        "Loaded snapshot for %s: %d wallets, %d goals, %d events, %d policies",
        client_id, len(snapshot.wallets), len(snapshot.goals),
        len(snapshot.events), len(snapshot.insurance),
    )
    return snapshot
