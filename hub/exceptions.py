"""
Tournament errors.

None of these is fatal: the sync layer turns every one of them into
"no state change", optionally with an advisory message to the caller.
"""


class TournamentError(Exception):
    """Base class for all tournament errors."""
    pass


class PrivilegeDenied(TournamentError):
    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Action '{action}' requires admin privilege")


class ValidationFailure(TournamentError):
    def __init__(self, field: str, reason: str = None):
        self.field = field
        self.reason = reason or f"Invalid value for '{field}'"
        super().__init__(self.reason)


# ============ Lookups ============

class NotFound(TournamentError):
    kind = "Entity"

    def __init__(self, key):
        self.key = key
        super().__init__(f"{self.kind} {key} not found")


class GroupNotFound(NotFound):
    kind = "Group"


class PersonNotFound(NotFound):
    kind = "Person"


class MatchNotFound(NotFound):
    kind = "Match"


# ============ Randomization constraints ============

class ConstraintViolation(TournamentError):
    """Reported back to the requesting session as an errorMsg."""

    def __init__(self, required: int, available: int, message: str):
        self.required = required
        self.available = available
        super().__init__(message)


class InsufficientPlayers(ConstraintViolation):
    def __init__(self, required: int, available: int):
        super().__init__(
            required,
            available,
            f"Need at least {required} selected players to randomize "
            f"(currently {available})."
        )


class InsufficientCaptains(ConstraintViolation):
    def __init__(self, required: int, available: int):
        super().__init__(
            required,
            available,
            f"Need at least {required} selected players marked as Ref + Captain "
            f"for slot A (currently {available})."
        )
