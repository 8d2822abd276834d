"""Domain models for sb_bet: pure dataclasses, no business logic."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass
class Bet:
    """A wager recorded for one NFL week.

    placed_by made the line available: in group mode they are the counterparty
    for every participant. For head-to-head bets, participants is the union of
    side_a and side_b (one user each in practice).

    Storage is lenient (documents migrated from the old app can be partial), so
    amount_per_person / odds may be None; the settlement engine skips such rows.
    """

    id: str
    weekend_id: str
    status: str
    betting_mode: str
    placed_by: str | None
    participants: list[str]
    amount_per_person: Decimal | None
    odds: int | None
    selection: str = ""
    bet_type: str = "moneyline"
    game_id: str | None = None
    line: Decimal | None = None
    side_a: list[str] | None = None
    side_b: list[str] | None = None
    result: str | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None
    parlay_leg_odds: list[int] = field(default_factory=list)

    @property
    def total_amount(self) -> Decimal | None:
        if self.amount_per_person is None:
            return None
        return self.amount_per_person * len(self.participants)
