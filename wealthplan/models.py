"""
Domain entities for WealthPlan.

Purpose
-------
Immutable, validated representations of the persisted records the engines
read: clients, wallets (portfolio holdings), goals, scheduled cash-flow
events and insurance policies. The record store itself is an external
collaborator (see ``repository.py``); these classes are what it hands
back.

Design Principles
-----------------
- Immutable: every entity is a frozen dataclass
- Validated on construction: ``__post_init__`` raises InvalidInputError
- Enum coercion: raw strings from the record layer are accepted for
  categorical fields and converted to the ``types`` enumerations
- Lenient frequencies: an Event keeps an unrecognized frequency string
  as-is so the normalizer can skip it instead of failing the whole read

Example
-------
>>> from datetime import date
>>> from wealthplan.models import Client, Wallet, Event
>>> client = Client(id="c-1", name="Ana", age=35)
>>> wallet = Wallet(id="w-1", client_id="c-1", asset_class="STOCKS",
...                 current_value=250_000)
>>> salary = Event(id="e-1", client_id="c-1", event_type="INCOME",
...                value=1_000, frequency="MONTHLY",
...                start_date=date(2025, 1, 1), end_date=date(2030, 12, 31))
>>> salary.is_active(2027)
True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple, Union

from .exceptions import InvalidInputError
from .types import AssetClass, EventType, Frequency

__all__ = [
    "Client",
    "Wallet",
    "Goal",
    "Event",
    "Insurance",
    "ClientSnapshot",
]


def _coerce(enum_cls, value, field_name: str):
    """Convert a raw string to ``enum_cls`` or raise InvalidInputError."""
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidInputError(
            f"{field_name} must be one of [{allowed}], got {value!r}"
        ) from None


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Client:
    """
    Advisory client.

    Parameters
    ----------
    id : str
        Record identifier.
    name : str
        Display name.
    age : int
        Age in years (non-negative).
    total_wealth : float
        Cached sum of wallet values. Recomputed by
        ``portfolio.recalculate_portfolio``; the engines prefer the live
        wallet sum when wallets are available.
    """
    id: str
    name: str
    age: int
    total_wealth: float = 0.0

    def __post_init__(self):
        if self.age < 0:
            raise InvalidInputError(f"age must be non-negative, got {self.age}")
        if self.total_wealth < 0:
            raise InvalidInputError(
                f"total_wealth must be non-negative, got {self.total_wealth}"
            )


# ---------------------------------------------------------------------------
# Wallet
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Wallet:
    """
    Single holding of a client's portfolio.

    Parameters
    ----------
    id : str
        Record identifier.
    client_id : str
        Owning client.
    asset_class : AssetClass or str
        Asset class tag.
    current_value : float
        Market value (>= 0).
    percentage : float
        Share of the client's portfolio in percent, within [0, 100].
    description : str
        Free text; the tax analyzer scans it for retirement vehicles.
    """
    id: str
    client_id: str
    asset_class: AssetClass
    current_value: float
    percentage: float = 0.0
    description: str = ""

    def __post_init__(self):
        object.__setattr__(
            self, "asset_class", _coerce(AssetClass, self.asset_class, "asset_class")
        )
        if self.current_value < 0:
            raise InvalidInputError(
                f"current_value must be non-negative, got {self.current_value}"
            )
        if not (0 <= self.percentage <= 100):
            raise InvalidInputError(
                f"percentage must be within [0, 100], got {self.percentage}"
            )


# ---------------------------------------------------------------------------
# Goal
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Goal:
    """
    Target wealth amount by a target date.

    Parameters
    ----------
    id : str
        Record identifier.
    client_id : str
        Owning client.
    name : str
        Display name (e.g., "Retirement", "Beach house").
    target_value : float
        Amount to reach (> 0).
    target_date : datetime.date
        Deadline.
    current_value : float
        Amount already accumulated towards the goal (>= 0).
    goal_type : str
        Free-form category set by the advisor (RETIREMENT, EDUCATION, ...).
    monthly_income : float, optional
        Desired income stream for income-type goals.

    Examples
    --------
    >>> goal = Goal(id="g-1", client_id="c-1", name="House",
    ...             target_value=400_000, target_date=date(2030, 6, 1),
    ...             current_value=100_000)
    >>> goal.progress_pct
    25.0
    """
    id: str
    client_id: str
    name: str
    target_value: float
    target_date: date
    current_value: float = 0.0
    goal_type: str = "OTHER"
    monthly_income: Optional[float] = None

    def __post_init__(self):
        if self.target_value <= 0:
            raise InvalidInputError(
                f"target_value must be > 0, got {self.target_value}"
            )
        if self.current_value < 0:
            raise InvalidInputError(
                f"current_value must be non-negative, got {self.current_value}"
            )
        if self.monthly_income is not None and self.monthly_income < 0:
            raise InvalidInputError(
                f"monthly_income must be non-negative, got {self.monthly_income}"
            )

    @property
    def target_year(self) -> int:
        return self.target_date.year

    @property
    def progress_pct(self) -> float:
        """Accumulated share of the target, in percent."""
        return self.current_value / self.target_value * 100


# ---------------------------------------------------------------------------
# Event
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Event:
    """
    Scheduled cash inflow or outflow.

    An event is active in calendar year ``y`` when
    ``start_date.year <= y <= (end_date or start_date).year``. Without an
    end date the event is therefore confined to its start year, whatever
    its frequency.

    Parameters
    ----------
    id : str
        Record identifier.
    client_id : str
        Owning client.
    event_type : EventType or str
        INCOME / DEPOSIT (inflows) or EXPENSE / WITHDRAWAL (outflows).
    value : float
        Amount per occurrence (> 0).
    frequency : Frequency or str
        ONCE / MONTHLY / YEARLY. Unrecognized strings are kept verbatim
        and contribute nothing to a projection.
    start_date : datetime.date
        First occurrence.
    end_date : datetime.date, optional
        Last occurrence (>= start_date).
    name : str
        Short label.
    description : str
        Longer label; preferred over ``name`` in projection output.
    """
    id: str
    client_id: str
    event_type: EventType
    value: float
    frequency: Union[Frequency, str]
    start_date: date
    end_date: Optional[date] = None
    name: str = ""
    description: str = ""

    def __post_init__(self):
        object.__setattr__(
            self, "event_type", _coerce(EventType, self.event_type, "event_type")
        )
        try:
            object.__setattr__(self, "frequency", Frequency(self.frequency))
        except ValueError:
            # kept verbatim; EventSchedule skips it
            pass
        if self.value <= 0:
            raise InvalidInputError(f"value must be positive, got {self.value}")
        if self.end_date is not None and self.end_date < self.start_date:
            raise InvalidInputError(
                f"end_date ({self.end_date.isoformat()}) must not precede "
                f"start_date ({self.start_date.isoformat()})"
            )

    @property
    def start_year(self) -> int:
        return self.start_date.year

    @property
    def end_year(self) -> int:
        """Last active calendar year (start year when no end date is set)."""
        return self.end_date.year if self.end_date is not None else self.start_date.year

    @property
    def label(self) -> str:
        return self.description or self.name

    def is_active(self, year: int) -> bool:
        """Whether the event overlaps calendar ``year``."""
        return self.start_year <= year <= self.end_year


# ---------------------------------------------------------------------------
# Insurance
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Insurance:
    """Insurance policy held by a client."""
    id: str
    client_id: str
    insurance_type: str
    coverage: float
    premium: float = 0.0
    premium_frequency: str = "MONTHLY"

    def __post_init__(self):
        if self.coverage < 0:
            raise InvalidInputError(
                f"coverage must be non-negative, got {self.coverage}"
            )
        if self.premium < 0:
            raise InvalidInputError(
                f"premium must be non-negative, got {self.premium}"
            )


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ClientSnapshot:
    """
    Consistent view of one client and all of its records.

    Produced once per engine call by ``repository.load_snapshot`` and
    passed to every analyzer, so all of them observe the same state.
    """
    client: Client
    wallets: Tuple[Wallet, ...] = field(default_factory=tuple)
    goals: Tuple[Goal, ...] = field(default_factory=tuple)
    events: Tuple[Event, ...] = field(default_factory=tuple)
    insurance: Tuple[Insurance, ...] = field(default_factory=tuple)

    @property
    def total_wealth(self) -> float:
        """Live wallet sum, or the client's cached value without wallets."""
        if self.wallets:
            return float(sum(w.current_value for w in self.wallets))
        return float(self.client.total_wealth)

    @property
    def total_coverage(self) -> float:
        return float(sum(p.coverage for p in self.insurance))
