"""American odds arithmetic.

  +150: a $100 stake profits $150 (underdog)
  -110: a $110 stake profits $100 (favorite)

All arithmetic is Decimal; nothing in here rounds except the parlay helpers,
which round the combined odds to an integer and the parlay payout to cents.
"""

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal

from src.sb_common.errors import InvalidBetError, InvalidOddsError
from src.sb_common.money import round_cents, to_decimal

_HUNDRED = Decimal(100)
_ONE = Decimal(1)
_TWO = Decimal(2)
_HALF = Decimal("0.5")


@dataclass(frozen=True)
class PayoutCalculation:
    stake: Decimal
    odds: int
    profit: Decimal
    total_payout: Decimal


def _check_odds(american_odds: int) -> int:
    # bool is an int subclass; True/False are never odds
    if isinstance(american_odds, bool) or not isinstance(american_odds, int):
        raise InvalidOddsError(american_odds)
    if american_odds == 0:
        raise InvalidOddsError(american_odds)
    return american_odds


def calculate_payout(stake: Decimal | int | str, american_odds: int) -> PayoutCalculation:
    """Profit and total payout for a single stake at American odds.

    odds > 0:  profit = stake * odds / 100
    odds < 0:  profit = stake * 100 / |odds|
    total_payout = stake + profit

    Raises InvalidOddsError for odds == 0 (undefined in the American convention).
    """
    odds = _check_odds(american_odds)
    amount = to_decimal(stake)
    if odds > 0:
        profit = amount * odds / _HUNDRED
    else:
        profit = amount * _HUNDRED / abs(odds)
    return PayoutCalculation(
        stake=amount,
        odds=odds,
        profit=profit,
        total_payout=amount + profit,
    )


def american_to_decimal(american_odds: int) -> Decimal:
    """+150 -> 2.5, -200 -> 1.5."""
    odds = _check_odds(american_odds)
    if odds > 0:
        return Decimal(odds) / _HUNDRED + _ONE
    return _HUNDRED / abs(odds) + _ONE


def decimal_to_american(decimal_odds: Decimal | str | int) -> int:
    """2.5 -> +150, 1.5 -> -200. Halves round toward +infinity."""
    value = to_decimal(decimal_odds)
    if value <= _ONE:
        raise InvalidOddsError(decimal_odds)
    if value >= _TWO:
        raw = (value - _ONE) * _HUNDRED
    else:
        raw = -_HUNDRED / (value - _ONE)
    return int((raw + _HALF).to_integral_value(rounding=ROUND_FLOOR))


def implied_probability(american_odds: int) -> Decimal:
    """Break-even win probability as a fraction: -110 -> 0.5238..., +150 -> 0.4."""
    odds = _check_odds(american_odds)
    if odds > 0:
        return _HUNDRED / (odds + _HUNDRED)
    return Decimal(abs(odds)) / (abs(odds) + _HUNDRED)


def parse_odds(value: str | int) -> int:
    """Accept American ("+500", "-110", "150", 150) or decimal ("2.5") odds; return American.

    An unsigned whole number of 100 or more is American: query strings decode
    "+150" to " 150", and decimal odds that large never occur.
    """
    if isinstance(value, bool):
        raise InvalidOddsError(value)
    if isinstance(value, int):
        return _check_odds(value)
    cleaned = str(value).strip()
    if not cleaned:
        raise InvalidOddsError(value)
    if cleaned[0] in "+-":
        try:
            return _check_odds(int(cleaned))
        except ValueError:
            raise InvalidOddsError(value) from None
    if cleaned.isdecimal() and int(cleaned) >= 100:
        return int(cleaned)
    try:
        return decimal_to_american(Decimal(cleaned))
    except ArithmeticError:
        raise InvalidOddsError(value) from None


def calculate_parlay_odds(leg_odds: list[int]) -> int:
    """Combine leg odds: multiply decimal odds, convert back to American."""
    if len(leg_odds) < 2:
        raise InvalidBetError("parlay must have at least 2 legs")
    multiplier = _ONE
    for odds in leg_odds:
        multiplier *= american_to_decimal(odds)
    return decimal_to_american(multiplier)


def calculate_parlay_payout(
    stake: Decimal | int | str, parlay_odds: int
) -> PayoutCalculation:
    """Parlay payout at combined odds, rounded to cents."""
    amount = to_decimal(stake)
    total = amount * american_to_decimal(parlay_odds)
    return PayoutCalculation(
        stake=amount,
        odds=parlay_odds,
        profit=round_cents(total - amount),
        total_payout=round_cents(total),
    )
