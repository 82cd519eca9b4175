"""Domain error taxonomy for the token economy.

Low-level datastore signals (unique violations, empty conditional updates)
are translated into these before leaving the economy package. Each error
carries the HTTP status it maps to and a stable machine-readable code.
"""

from __future__ import annotations


class StudyBuddyError(Exception):
    """Base class for expected, classified failures."""

    status_code: int = 400
    code: str = "error"
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


# ---------------------------------------------------------------------------
# Not found (bad references)
# ---------------------------------------------------------------------------


class NotFoundError(StudyBuddyError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class UserNotFound(NotFoundError):
    code = "user_not_found"
    default_message = "User not found"


class ExerciseNotFound(NotFoundError):
    code = "exercise_not_found"
    default_message = "Exercise not found"


class SolutionNotFound(NotFoundError):
    code = "solution_not_found"
    default_message = "Solution not found"


class ItemNotFound(NotFoundError):
    code = "item_not_found"
    default_message = "Item not found"


class ProblemNotFound(NotFoundError):
    """Unknown problem, or one captured by a different user."""

    code = "problem_not_found"
    default_message = "Problem not found"


# ---------------------------------------------------------------------------
# Business conflicts
# ---------------------------------------------------------------------------


class ConflictError(StudyBuddyError):
    status_code = 409
    code = "conflict"
    default_message = "Conflict"


class AlreadyOwned(ConflictError):
    code = "already_owned"
    default_message = "Item already purchased"


class NotFoundOrAlreadyCompleted(ConflictError):
    """Attempt is missing, belongs to someone else, or was already completed.

    Deliberately ambiguous: telling the cases apart would need a read before
    the conditional update.
    """

    code = "not_found_or_already_completed"
    default_message = "Exercise not found, already completed, or access denied"


class InsufficientFunds(StudyBuddyError):
    status_code = 402
    code = "insufficient_funds"
    default_message = "Insufficient tokens"


class EntitlementRequired(StudyBuddyError):
    status_code = 403
    code = "entitlement_required"
    default_message = "Access denied. Purchase solution first."


# ---------------------------------------------------------------------------
# Fatal
# ---------------------------------------------------------------------------


class ExerciseCatalogMissing(StudyBuddyError):
    """An attempt references an exercise that is no longer in the catalog."""

    status_code = 500
    code = "exercise_catalog_missing"
    default_message = "Failed to complete exercise"
