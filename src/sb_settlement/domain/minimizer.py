"""Debt minimizer: turn net balances into pairwise payments.

Greedy largest-balance matching:
  1. creditors (net > 0) sorted largest first, debtors (net < 0) most negative first
  2. pay min(creditor, |debtor|), rounded to cents, from debtor to creditor
  3. only payments above one cent are emitted
  4. a party whose rounded remaining balance is within one cent of zero is done
  5. stop when either side runs out

Ties keep input order (sorted() is stable), so the roster order decides them.
Not a global minimum transaction count, but with conserved input every
balance is discharged.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal

from src.sb_common.money import CENT, round_cents
from src.sb_settlement.domain.models import Settlement

logger = logging.getLogger(__name__)


def _settled(balance: Decimal) -> bool:
    return abs(round_cents(balance)) <= CENT


def minimize_debts(
    nets: Mapping[str, Decimal],
) -> tuple[list[Settlement], dict[str, Decimal]]:
    """Return (settlements, residuals). Residuals are balances the loop could not discharge.

    The input mapping is not modified.
    """
    remaining = dict(nets)
    creditors = sorted((u for u, n in remaining.items() if n > 0), key=lambda u: -remaining[u])
    debtors = sorted((u for u, n in remaining.items() if n < 0), key=lambda u: remaining[u])

    settlements: list[Settlement] = []
    ci = di = 0
    while ci < len(creditors) and di < len(debtors):
        creditor = creditors[ci]
        debtor = debtors[di]
        amount = round_cents(min(remaining[creditor], -remaining[debtor]))

        if amount > CENT:
            settlements.append(Settlement(from_user=debtor, to_user=creditor, amount=amount))
            remaining[creditor] = round_cents(remaining[creditor] - amount)
            remaining[debtor] = round_cents(remaining[debtor] + amount)

        if _settled(remaining[creditor]):
            ci += 1
        if _settled(remaining[debtor]):
            di += 1

    residuals = {u: round_cents(n) for u, n in remaining.items() if not _settled(n)}
    if residuals:
        logger.warning("Unsettled residual balances after minimization: %s", residuals)
    logger.debug("Minimized %d balances into %d settlements", len(nets), len(settlements))
    return settlements, residuals
