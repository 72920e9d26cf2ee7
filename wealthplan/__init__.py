"""
WealthPlan: Long-range Wealth Planning Core

Projects a client's wealth year by year, solves for the contribution
needed to reach a target, and ranks advisory suggestions over the
client's portfolio, goals, insurance and tax situation.

Modules
-------
- projection    : Wealth-curve simulator and projection summary
- contribution  : Required-contribution solver and goal plans
- advisor       : Suggestion engine (runs and ranks the analyzers)
- analyzers     : Portfolio, goal, risk and tax heuristics
- events        : Scheduled cash-flow normalization
- goals         : Goal progress tracking
- portfolio     : Allocation, recalculation and rebalancing helpers
- repository    : Record-store interface and in-memory implementation
- config        : Pydantic parameters and settings
"""

from .advisor import compute_suggestions, generate_suggestions
from .config import AdvisoryConfig, AppSettings, ProjectionParameters
from .contribution import plan_goal_contribution, required_contribution
from .exceptions import InvalidInputError, NotFoundError, WealthPlanError
from .models import Client, ClientSnapshot, Event, Goal, Insurance, Wallet
from .projection import compute_projection, simulate_wealth_curve
from .repository import ClientRepository, InMemoryRepository
from . import utils

__version__ = "0.1.0"
