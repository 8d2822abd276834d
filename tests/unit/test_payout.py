"""Tests for sb_odds.domain.payout: American odds arithmetic."""

from decimal import Decimal

import pytest

from src.sb_common.errors import InvalidBetError, InvalidOddsError
from src.sb_common.money import round_cents
from src.sb_odds.domain.payout import (
    american_to_decimal,
    calculate_parlay_odds,
    calculate_parlay_payout,
    calculate_payout,
    decimal_to_american,
    implied_probability,
    parse_odds,
)


class TestCalculatePayout:
    def test_underdog(self) -> None:
        calc = calculate_payout(100, 150)
        assert calc.profit == Decimal("150")
        assert calc.total_payout == Decimal("250")

    def test_favorite(self) -> None:
        calc = calculate_payout(110, -110)
        assert calc.profit == Decimal("100")
        assert calc.total_payout == Decimal("210")

    def test_even_money(self) -> None:
        assert calculate_payout(50, 100).profit == Decimal("50")
        assert calculate_payout(50, -100).profit == Decimal("50")

    def test_fractional_cents_are_kept(self) -> None:
        # 25 * 100 / 110 = 22.7272...
        calc = calculate_payout(Decimal("25"), -110)
        assert calc.profit > Decimal("22.727")
        assert calc.profit < Decimal("22.728")
        assert round_cents(calc.profit) == Decimal("22.73")

    def test_accepts_string_stake(self) -> None:
        assert calculate_payout("10.50", 200).profit == Decimal("21.00")

    def test_zero_odds_raises(self) -> None:
        with pytest.raises(InvalidOddsError) as exc_info:
            calculate_payout(100, 0)
        assert exc_info.value.code == 2001

    def test_bool_odds_rejected(self) -> None:
        with pytest.raises(InvalidOddsError):
            calculate_payout(100, True)  # type: ignore[arg-type]


class TestOddsConversion:
    def test_american_to_decimal(self) -> None:
        assert american_to_decimal(150) == Decimal("2.5")
        assert american_to_decimal(-200) == Decimal("1.5")

    def test_decimal_to_american(self) -> None:
        assert decimal_to_american(Decimal("2.5")) == 150
        assert decimal_to_american(Decimal("1.5")) == -200

    def test_decimal_to_american_rejects_one(self) -> None:
        with pytest.raises(InvalidOddsError):
            decimal_to_american(Decimal("1"))

    def test_implied_probability(self) -> None:
        assert implied_probability(150) == Decimal("0.4")
        assert round(implied_probability(-110), 4) == Decimal("0.5238")


class TestParseOdds:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("+500", 500), ("-110", -110), (150, 150), ("2.5", 150), (" -200 ", -200),
            ("150", 150), (" 150", 150), ("100", 100),
        ],
    )
    def test_formats(self, raw, expected) -> None:
        assert parse_odds(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "+", "0", "+0", "1.0", "²"])
    def test_invalid(self, raw) -> None:
        with pytest.raises(InvalidOddsError):
            parse_odds(raw)

    def test_small_unsigned_whole_number_is_decimal(self) -> None:
        # 3.0 decimal -> +200
        assert parse_odds("3") == 200


class TestParlay:
    def test_two_leg_parlay_odds(self) -> None:
        # -110 x -110: 1.9090.. * 1.9090.. = 3.6446 -> +264
        assert calculate_parlay_odds([-110, -110]) == 264

    def test_three_leg_parlay_odds(self) -> None:
        # 2.5 * 2.0 * 1.5 = 7.5 -> +650
        assert calculate_parlay_odds([150, 100, -200]) == 650

    def test_single_leg_rejected(self) -> None:
        with pytest.raises(InvalidBetError):
            calculate_parlay_odds([-110])

    def test_parlay_payout_rounds_to_cents(self) -> None:
        calc = calculate_parlay_payout(Decimal("10"), 264)
        assert calc.total_payout == Decimal("36.40")
        assert calc.profit == Decimal("26.40")
