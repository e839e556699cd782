"""Tests for money rounding and formatting."""

import math

from slyp_receipts.extractors.money import format_fixed2, format_money, is_number, round2


class TestIsNumber:
    """Tests for the numeric type guard."""

    def test_accepts_ints_and_finite_floats(self) -> None:
        assert is_number(3)
        assert is_number(0)
        assert is_number(2.5)

    def test_rejects_bools_strings_and_non_finite(self) -> None:
        assert not is_number(True)
        assert not is_number("3")
        assert not is_number(None)
        assert not is_number(float("nan"))
        assert not is_number(float("inf"))

    def test_integers_beyond_float_range(self) -> None:
        assert is_number(10**20)
        assert not is_number(10**400)


class TestRound2:
    """Tests for two-decimal rounding."""

    def test_ties_round_away_from_zero(self) -> None:
        assert round2(0.125) == 0.13
        assert round2(-0.125) == -0.13

    def test_binary_representation_is_respected(self) -> None:
        """1.005 and 2.675 are stored just below the tie."""
        assert round2(1.005) == 1.0
        assert round2(2.675) == 2.67

    def test_integers(self) -> None:
        assert round2(17) == 17.0

    def test_large_values_left_unrounded(self) -> None:
        assert round2(1e27) == 1e27
        assert round2(-1e21) == -1e21
        assert round2(10**22) == 10**22
        assert format_fixed2(1e21) == "1e+21"

    def test_non_finite_values_pass_through(self) -> None:
        assert round2(float("inf")) == float("inf")
        assert math.isnan(round2(float("nan")))
        assert format_fixed2(float("-inf")) == "-inf"

    def test_format_fixed2_matches_round2(self) -> None:
        assert format_fixed2(2.675) == "2.67"
        assert format_fixed2(0.125) == "0.13"
        assert format_fixed2(3) == "3.00"


class TestFormatMoney:
    """Tests for locale currency formatting."""

    def test_aud_grouping(self) -> None:
        assert format_money(1234.5, "AUD") == "$1,234.50"

    def test_two_decimals(self) -> None:
        assert format_money(17, "AUD") == "$17.00"

    def test_unknown_locale_falls_back(self) -> None:
        assert format_money(1234.5, "AUD", locale="zz") == "AUD 1,234.50"

    def test_huge_amount(self) -> None:
        assert format_money(1e27, "AUD").endswith(".00")

    def test_infinite_amount(self) -> None:
        assert format_money(float("inf"), "AUD") == "AUD inf"
