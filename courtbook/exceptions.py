"""Domain-specific exceptions for Courtbook."""


class CourtbookError(Exception):
    """Base exception for Courtbook failures."""

    pass


class StatValidationError(CourtbookError):
    """Raised when a stat record breaks a boundary rule (e.g. made > attempted)."""

    pass


class ManualTotalsConflictError(StatValidationError):
    """Raised when manual season totals are written for a season that has games."""

    pass


class AwardCapacityError(StatValidationError):
    """Raised when an award already has its maximum number of winners."""

    pass


class UnknownTeamError(CourtbookError):
    """Raised when a team id cannot be resolved and the fallback policy is 'error'."""

    pass


class UnknownSplitError(CourtbookError):
    """Raised when an unknown game split is requested."""

    pass


class NotFoundError(CourtbookError):
    """Raised when a referenced record does not exist in the store."""

    pass
