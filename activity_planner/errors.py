"""Error hierarchy for the persistence and HTTP layers.

The suggestion engine itself raises nothing in normal operation; these errors
come from writes against the store and are mapped to HTTP status codes by the API.
"""


class PlannerError(Exception):
    """Base exception for all planner errors."""

    pass


class NotFoundError(PlannerError):
    """A referenced activity, context or category does not exist."""

    pass


class ValidationError(PlannerError):
    """Input that passed schema validation but breaks a domain rule."""

    pass


class ConflictError(PlannerError):
    """Write rejected by a uniqueness constraint (e.g. duplicate context name)."""

    pass
