"""Exceptions raised by the scaling and consolidation engine."""


class RecipeScalerError(Exception):
    """Base exception for recipescaler errors."""


class CallerContractViolation(RecipeScalerError, ValueError):
    """Raised when top-level input is malformed (broken caller, not bad data)."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class InvalidAmountError(CallerContractViolation):
    """Raised when an amount is negative, NaN or infinite."""

    def __init__(self, amount: object):
        super().__init__(f"Amount must be a finite, non-negative number, got {amount!r}", "amount")
        self.amount = amount
