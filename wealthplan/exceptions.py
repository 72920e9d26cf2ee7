"""
Custom exceptions for WealthPlan.

Purpose
-------
Provides a unified exception hierarchy for consistent error handling
across all WealthPlan modules. All exceptions inherit from WealthPlanError,
enabling catch-all handling at the orchestration boundary.

Exception Hierarchy
-------------------
WealthPlanError (base)
├── NotFoundError - Client or goal absent from the record store
├── InvalidInputError - Malformed entities, ranges or arguments
│   └── HorizonLimitError - Projection horizon exceeds the configured bound
└── ConfigurationError - Invalid settings or configuration documents

Usage
-----
>>> from wealthplan.exceptions import NotFoundError, WealthPlanError
>>>
>>> # Raise specific exception
>>> raise NotFoundError("Client 'c-42' not found")
>>>
>>> # Catch all WealthPlan exceptions
>>> try:
...     suggestions = compute_suggestions(repo, "c-42")
>>> except WealthPlanError as e:
...     print(f"WealthPlan error: {e}")
"""


class WealthPlanError(Exception):
    """
    Base exception for all WealthPlan errors.

    Examples
    --------
    >>> try:
    ...     result = compute_projection(repo, params)
    ... except WealthPlanError as e:
    ...     logger.error(f"Projection failed: {e}")
    """
    pass


class NotFoundError(WealthPlanError):
    """
    Requested record does not exist.

    Raised by the orchestration functions when the repository cannot
    locate the client (or, for contribution plans, the goal). Never
    retried: the caller decides how to surface it.

    Examples
    --------
    >>> raise NotFoundError(f"Client {client_id!r} not found")
    """
    pass


class InvalidInputError(WealthPlanError):
    """
    Malformed input.

    Raised when entities or arguments fail validation, such as:
    - Negative monetary values or percentages out of [0, 100]
    - Event end date before its start date
    - Negative number of years for the contribution solver

    Examples
    --------
    >>> raise InvalidInputError(
    ...     f"years must be non-negative, got {years}."
    ... )
    """
    pass


class HorizonLimitError(InvalidInputError):
    """
    Projection horizon too long.

    Raised when ``end_year - start_year + 1`` exceeds the configured
    maximum, so that malformed year ranges cannot drive an unbounded
    simulation loop.

    Examples
    --------
    >>> raise HorizonLimitError(
    ...     f"Projection spans {n_years} years; maximum is {max_years}. "
    ...     f"Raise WEALTHPLAN_MAX_HORIZON_YEARS or narrow the year range."
    ... )
    """
    pass


class ConfigurationError(WealthPlanError):
    """
    Invalid configuration.

    Raised when a client document or settings file cannot be turned into
    valid domain objects (missing sections, unsupported schema version).
    """
    pass
