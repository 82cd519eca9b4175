"""Domain error taxonomy."""

import pytest

from studybuddy.economy.errors import (
    AlreadyOwned,
    ConflictError,
    EntitlementRequired,
    ExerciseCatalogMissing,
    InsufficientFunds,
    ItemNotFound,
    NotFoundError,
    NotFoundOrAlreadyCompleted,
    ProblemNotFound,
    StudyBuddyError,
    UserNotFound,
)


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (UserNotFound, 404),
        (ItemNotFound, 404),
        (ProblemNotFound, 404),
        (AlreadyOwned, 409),
        (NotFoundOrAlreadyCompleted, 409),
        (InsufficientFunds, 402),
        (EntitlementRequired, 403),
        (ExerciseCatalogMissing, 500),
    ],
)
def test_status_codes(error: type[StudyBuddyError], status: int) -> None:
    assert error().status_code == status


def test_hierarchy() -> None:
    assert issubclass(UserNotFound, NotFoundError)
    assert issubclass(AlreadyOwned, ConflictError)
    assert issubclass(NotFoundOrAlreadyCompleted, ConflictError)
    assert not issubclass(InsufficientFunds, ConflictError)


def test_default_and_custom_message() -> None:
    assert InsufficientFunds().message == "Insufficient tokens"
    assert str(ItemNotFound("No such item: 9")) == "No such item: 9"
