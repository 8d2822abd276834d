"""Global enums — must match DB CHECK constraints exactly (see alembic 001)."""

from enum import Enum


class BetStatus(str, Enum):
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


class BettingMode(str, Enum):
    """Accounting rule for a bet. PARLAY settles with the GROUP rule."""
    GROUP = "group"
    HEAD_TO_HEAD = "head_to_head"
    PARLAY = "parlay"


class BetType(str, Enum):
    SPREAD = "spread"
    OVER_UNDER = "over_under"
    MONEYLINE = "moneyline"
    PLAYER_PROP = "player_prop"
    PARLAY = "parlay"


class BetResult(str, Enum):
    """Outcome accepted by the resolve endpoint."""
    WON = "won"
    LOST = "lost"


class SettlementWarningCode(str, Enum):
    UNKNOWN_PARTICIPANT = "UNKNOWN_PARTICIPANT"
    INVALID_ODDS = "INVALID_ODDS"
    MALFORMED_BET = "MALFORMED_BET"
    RESIDUAL_BALANCE = "RESIDUAL_BALANCE"


RESOLVED_STATUSES = frozenset({BetStatus.WON.value, BetStatus.LOST.value})
