"""Weekly settlement engine.

    bets -> accumulate_balances -> head-to-head transfers -> minimize_debts

Pure and synchronous: the result depends only on the bet list (and its order)
and the roster, and nothing is written back. Running it twice on the same
snapshot gives the same answer.
"""

import logging
from collections.abc import Iterable, Sequence

from src.sb_bet.domain.models import Bet
from src.sb_common.enums import BetStatus, SettlementWarningCode
from src.sb_common.money import ZERO
from src.sb_settlement.domain.accumulator import accumulate_balances
from src.sb_settlement.domain.minimizer import minimize_debts
from src.sb_settlement.domain.models import SettlementResult, SettlementSummary
from src.sb_settlement.domain.reconciler import (
    apply_head_to_head_transfers,
    find_head_to_head_transfers,
)

logger = logging.getLogger(__name__)


def _dedupe(roster: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(roster))


def compute_weekly_settlement(bets: Sequence[Bet], roster: Iterable[str]) -> SettlementResult:
    """Compute balances, who-pays-whom and a summary for one week's bets."""
    users = _dedupe(roster)
    logger.info("Calculating settlement for %d bets across %d users", len(bets), len(users))

    sheet = accumulate_balances(bets, users)
    transfers = find_head_to_head_transfers(bets)
    applied = apply_head_to_head_transfers(sheet, transfers)

    nets = {user: balance.net for user, balance in sheet.balances.items()}
    settlements, residuals = minimize_debts(nets)
    for user_id, amount in residuals.items():
        sheet.warn(
            SettlementWarningCode.RESIDUAL_BALANCE,
            f"balance {amount} could not be settled against the other users",
            user_id=user_id,
        )

    balances = sheet.balances.values()
    summary = SettlementSummary(
        total_won=sum((b.won for b in balances), ZERO),
        total_lost=sum((b.lost for b in balances), ZERO),
        total_net=sum((b.net for b in balances), ZERO),
        total_bets=len(bets),
        resolved_bets=sum(1 for bet in bets if bet.status != BetStatus.ACTIVE.value),
    )
    logger.info(
        "Settlement calculated: %d transactions needed, %d warnings",
        len(settlements),
        len(sheet.warnings),
    )
    return SettlementResult(
        user_balances=sheet.balances,
        settlements=settlements,
        summary=summary,
        head_to_head_transfers=applied,
        warnings=sheet.warnings,
    )
