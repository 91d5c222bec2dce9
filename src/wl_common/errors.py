"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth
  2xxx: Profile / balance
  3xxx: Market
  4xxx: Bet input
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth ---

class UnauthorizedError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Unauthorized", 401)


# --- 2xxx: Profile / balance ---

class InsufficientBalanceError(AppError):
    def __init__(self) -> None:
        super().__init__(2001, "Insufficient balance", 400)


class ProfileNotFoundError(AppError):
    def __init__(self) -> None:
        super().__init__(2002, "Profile not found", 404)


# --- 3xxx: Market ---

class MarketNotFoundError(AppError):
    def __init__(self) -> None:
        super().__init__(3001, "Market not found", 404)


class MarketNotActiveError(AppError):
    def __init__(self) -> None:
        super().__init__(3002, "Market is not active", 400)


# --- 4xxx: Bet input ---

class InvalidInputError(AppError):
    def __init__(
        self,
        detail: str = "Invalid input: marketId, outcome, and positive amount required",
    ) -> None:
        super().__init__(4001, detail, 400)


class InvalidOutcomeError(AppError):
    def __init__(self) -> None:
        super().__init__(4002, "Invalid outcome: must be A or B", 400)


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class TransactionFailureError(AppError):
    """The atomic mutation aborted; nothing was committed, so a full retry is safe."""

    retryable = True

    def __init__(self, detail: str = "Failed to place bet, please retry") -> None:
        super().__init__(9003, detail, 500)
