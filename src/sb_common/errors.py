"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Bet
  2xxx: Odds / Settlement
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


# --- 1xxx: Bet ---

class BetNotFoundError(AppError):
    def __init__(self, bet_id: str) -> None:
        super().__init__(1001, f"Bet not found: {bet_id}", 404)


class BetNotResolvableError(AppError):
    def __init__(self, bet_id: str, status: str) -> None:
        super().__init__(1002, f"Bet {bet_id} in status {status} cannot be changed", 422)


class UnknownUserError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(1003, f"User is not on the roster: {user_id}", 422)


class InvalidBetError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(1004, f"Invalid bet: {detail}", 422)


# --- 2xxx: Odds / Settlement ---

class InvalidOddsError(AppError):
    def __init__(self, odds: object) -> None:
        self.odds = odds
        super().__init__(2001, f"Invalid American odds: {odds}", 422)


class InvalidWeekendIdError(AppError):
    def __init__(self, weekend_id: str) -> None:
        super().__init__(
            2002, f"Invalid weekend id: {weekend_id!r} (expected <year>-week-<n>)", 422
        )


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
