"""Head-to-head reconciler.

Two users who each log their side of the same head-to-head wager end up with
two opposing bets: one resolved won, the other lost. Matching pairs become a
direct loser -> winner transfer on top of the accumulator's per-bet booking.

Matching is a text heuristic: the two bets must have opposite resolved
statuses and one bet's selection must mention the other bet's placer
(case-sensitive substring). Only the first match for each bet counts. There
is no structural link between the two records, so a loose selection string
can pair the wrong bets.
"""

import logging
from collections.abc import Sequence
from decimal import Decimal

from src.sb_bet.domain.models import Bet
from src.sb_common.enums import BetStatus, BettingMode, SettlementWarningCode
from src.sb_common.money import ZERO, money_display, to_decimal
from src.sb_settlement.domain.accumulator import BalanceSheet
from src.sb_settlement.domain.models import Settlement

logger = logging.getLogger(__name__)

_OPPOSITE = {
    BetStatus.WON.value: BetStatus.LOST.value,
    BetStatus.LOST.value: BetStatus.WON.value,
}


def _is_live_head_to_head(bet: Bet) -> bool:
    return (
        bet.betting_mode == BettingMode.HEAD_TO_HEAD.value
        and bet.status != BetStatus.CANCELLED.value
    )


def _mentions_each_other(a: Bet, b: Bet) -> bool:
    return bool(
        (b.placed_by and b.placed_by in (a.selection or ""))
        or (a.placed_by and a.placed_by in (b.selection or ""))
    )


def find_opposing_bet(bet: Bet, bets: Sequence[Bet]) -> Bet | None:
    """First other live head-to-head bet with the opposite outcome that cross-references this one."""
    wanted = _OPPOSITE.get(bet.status)
    if wanted is None:
        return None
    for other in bets:
        if (
            other.id != bet.id
            and _is_live_head_to_head(other)
            and other.status == wanted
            and _mentions_each_other(bet, other)
        ):
            return other
    return None


def find_head_to_head_transfers(bets: Sequence[Bet]) -> dict[tuple[str, str], Decimal]:
    """Sum of direct transfers keyed by (loser, winner), from every won bet with a match."""
    transfers: dict[tuple[str, str], Decimal] = {}
    for bet in bets:
        if not _is_live_head_to_head(bet) or bet.status != BetStatus.WON.value:
            continue
        opposing = find_opposing_bet(bet, bets)
        if opposing is None:
            continue
        if not bet.placed_by or not opposing.placed_by or bet.amount_per_person is None:
            continue
        key = (opposing.placed_by, bet.placed_by)
        amount = to_decimal(bet.amount_per_person)
        transfers[key] = transfers.get(key, ZERO) + amount
        logger.info(
            "Head-to-head match %s/%s: %s owes %s %s",
            bet.id, opposing.id, opposing.placed_by, bet.placed_by, money_display(amount),
        )
    return transfers


def apply_head_to_head_transfers(
    sheet: BalanceSheet, transfers: dict[tuple[str, str], Decimal]
) -> list[Settlement]:
    """Move each transfer from loser to winner on the sheet; returns the transfers applied.

    won/lost move with net so that net == won - lost keeps holding.
    """
    applied: list[Settlement] = []
    for (loser, winner), amount in transfers.items():
        if not (sheet.knows(loser) and sheet.knows(winner)):
            for user_id in (loser, winner):
                if not sheet.knows(user_id):
                    sheet.warn(
                        SettlementWarningCode.UNKNOWN_PARTICIPANT,
                        f"user {user_id!r} is not on the roster; head-to-head transfer skipped",
                        user_id=user_id,
                    )
            continue
        sheet.balances[loser].debit(amount)
        sheet.balances[winner].credit(amount)
        applied.append(Settlement(from_user=loser, to_user=winner, amount=amount))
        logger.info("Applied H2H transfer: %s pays %s %s", loser, winner, money_display(amount))
    return applied
