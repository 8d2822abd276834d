"""Domain models for sb_settlement: pure dataclasses.

Amounts are exact Decimals; rounding to cents happens in the minimizer (for
transfers) and in the schema layer (for API output).
"""

from dataclasses import dataclass, field
from decimal import Decimal

from src.sb_common.money import ZERO


@dataclass
class UserBalance:
    """Running totals for one user. net is derived, so net == won - lost always holds."""

    won: Decimal = ZERO
    lost: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.won - self.lost

    def credit(self, amount: Decimal) -> None:
        self.won += amount

    def debit(self, amount: Decimal) -> None:
        self.lost += amount


@dataclass(frozen=True)
class Settlement:
    """One directed payment: from_user pays to_user amount (positive, cents)."""

    from_user: str
    to_user: str
    amount: Decimal


@dataclass(frozen=True)
class SettlementWarning:
    code: str
    detail: str
    bet_id: str | None = None
    user_id: str | None = None


@dataclass(frozen=True)
class SettlementSummary:
    total_won: Decimal
    total_lost: Decimal
    total_net: Decimal
    total_bets: int
    resolved_bets: int


@dataclass
class SettlementResult:
    user_balances: dict[str, UserBalance]
    settlements: list[Settlement]
    summary: SettlementSummary
    head_to_head_transfers: list[Settlement] = field(default_factory=list)
    warnings: list[SettlementWarning] = field(default_factory=list)
