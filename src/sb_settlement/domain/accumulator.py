"""Balance accumulator — fold a week's resolved bets into per-user won/lost.

Accounting rules (bet-maker responsibility model):

head_to_head
    status=won  -> placed_by won, the other participant lost
    status=lost -> placed_by lost, the other participant won
    The winner is credited amount_per_person, the loser debited the same.
    The placer's own status field says which of the two sides won.

group / parlay
    placed_by is the house for their own participants.
    status=won  -> every participant credited profit (payout at the bet's odds),
                   placed_by debited profit * len(participants)
    status=lost -> every participant debited amount_per_person,
                   placed_by credited amount_per_person * len(participants)
    A placer who also joined their own bet is booked twice: once as the
    house, once as a participant.

Only won/lost bets are booked; active, unknown and cancelled bets are ignored.
Users outside the roster are never booked; each dropped entry is reported
as a warning since it breaks the zero-sum property of the week.
"""

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal

from src.sb_bet.domain.models import Bet
from src.sb_common.enums import (
    RESOLVED_STATUSES,
    BetStatus,
    BettingMode,
    SettlementWarningCode,
)
from src.sb_common.errors import InvalidOddsError
from src.sb_common.money import to_decimal
from src.sb_odds.domain.payout import calculate_payout
from src.sb_settlement.domain.models import SettlementWarning, UserBalance

logger = logging.getLogger(__name__)

_GROUP_RULE_MODES = frozenset({BettingMode.GROUP.value, BettingMode.PARLAY.value})
_KNOWN_MODES = _GROUP_RULE_MODES | {BettingMode.HEAD_TO_HEAD.value}


class BalanceSheet:
    """Per-roster-user balances plus the warnings raised while filling them."""

    def __init__(self, roster: Iterable[str]) -> None:
        self.balances: dict[str, UserBalance] = {user: UserBalance() for user in roster}
        self.warnings: list[SettlementWarning] = []

    def knows(self, user_id: str | None) -> bool:
        return user_id is not None and user_id in self.balances

    def credit(self, user_id: str, amount: Decimal, bet_id: str) -> None:
        if self._check_user(user_id, bet_id):
            self.balances[user_id].credit(amount)

    def debit(self, user_id: str, amount: Decimal, bet_id: str) -> None:
        if self._check_user(user_id, bet_id):
            self.balances[user_id].debit(amount)

    def warn(
        self,
        code: SettlementWarningCode,
        detail: str,
        bet_id: str | None = None,
        user_id: str | None = None,
    ) -> None:
        logger.warning("Settlement warning %s: %s (bet=%s)", code.value, detail, bet_id)
        self.warnings.append(
            SettlementWarning(code=code.value, detail=detail, bet_id=bet_id, user_id=user_id)
        )

    def _check_user(self, user_id: str, bet_id: str) -> bool:
        if self.knows(user_id):
            return True
        self.warn(
            SettlementWarningCode.UNKNOWN_PARTICIPANT,
            f"user {user_id!r} is not on the roster; entry dropped",
            bet_id=bet_id,
            user_id=user_id,
        )
        return False


def malformed_reason(bet: Bet) -> str | None:
    """Why a resolved bet cannot be booked, or None when it is well-formed."""
    if bet.betting_mode not in _KNOWN_MODES:
        return f"unknown betting mode {bet.betting_mode!r}"
    if not bet.placed_by:
        return "missing placed_by"
    if not bet.participants:
        return "no participants"
    if bet.amount_per_person is None:
        return "missing amount_per_person"
    if bet.amount_per_person <= 0:
        return f"non-positive amount_per_person {bet.amount_per_person}"
    if bet.betting_mode in _GROUP_RULE_MODES and bet.odds is None:
        return "missing odds"
    return None


def head_to_head_sides(bet: Bet) -> tuple[str | None, str | None]:
    """(winner, loser) for a resolved head-to-head bet; the opponent is the first other participant."""
    opponent = next((p for p in bet.participants if p != bet.placed_by), None)
    if bet.status == BetStatus.WON.value:
        return bet.placed_by, opponent
    return opponent, bet.placed_by


def _book_head_to_head(sheet: BalanceSheet, bet: Bet) -> None:
    winner, loser = head_to_head_sides(bet)
    if winner is None or loser is None:
        sheet.warn(
            SettlementWarningCode.MALFORMED_BET,
            "head-to-head bet has no opponent",
            bet_id=bet.id,
        )
        return
    unknown = [u for u in (winner, loser) if not sheet.knows(u)]
    if unknown:
        # Book both sides or neither
        for user_id in unknown:
            sheet.warn(
                SettlementWarningCode.UNKNOWN_PARTICIPANT,
                f"user {user_id!r} is not on the roster; head-to-head bet skipped",
                bet_id=bet.id,
                user_id=user_id,
            )
        return
    amount = to_decimal(bet.amount_per_person)
    sheet.credit(winner, amount, bet.id)
    sheet.debit(loser, amount, bet.id)
    logger.debug("H2H %s: %s +%s, %s -%s", bet.id, winner, amount, loser, amount)


def _book_group(sheet: BalanceSheet, bet: Bet) -> None:
    # malformed_reason() has already ruled out None for these
    stake = to_decimal(bet.amount_per_person)
    house: str = bet.placed_by  # type: ignore[assignment]
    headcount = len(bet.participants)

    if bet.status == BetStatus.WON.value:
        try:
            profit = calculate_payout(stake, bet.odds).profit  # type: ignore[arg-type]
        except InvalidOddsError as exc:
            sheet.warn(SettlementWarningCode.INVALID_ODDS, exc.message, bet_id=bet.id)
            return
        sheet.debit(house, profit * headcount, bet.id)
        for participant in bet.participants:
            sheet.credit(participant, profit, bet.id)
    else:
        for participant in bet.participants:
            sheet.debit(participant, stake, bet.id)
        sheet.credit(house, stake * headcount, bet.id)


def accumulate_balances(bets: Sequence[Bet], roster: Iterable[str]) -> BalanceSheet:
    """Book every resolved bet against a fresh balance sheet for the roster."""
    sheet = BalanceSheet(roster)
    booked = 0
    for bet in bets:
        if bet.status not in RESOLVED_STATUSES:
            continue
        reason = malformed_reason(bet)
        if reason is not None:
            sheet.warn(SettlementWarningCode.MALFORMED_BET, reason, bet_id=bet.id)
            continue
        if bet.betting_mode == BettingMode.HEAD_TO_HEAD.value:
            _book_head_to_head(sheet, bet)
        else:
            _book_group(sheet, bet)
        booked += 1
    logger.info("Processed %d resolved bets out of %d", booked, len(bets))
    return sheet
