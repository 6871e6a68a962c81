"""Tests for rupee, area and duration formatting."""

from __future__ import annotations

import pytest

from nirman.formatting import (
    format_area,
    format_inr,
    format_inr_compact,
    format_months,
    group_indian,
)


class TestGroupIndian:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (0, "0"),
            (999, "999"),
            (1000, "1,000"),
            (99_999, "99,999"),
            (100_000, "1,00,000"),
            (4_005_549, "40,05,549"),
            (123_456_789, "12,34,56,789"),
            (-1_234_567, "-12,34,567"),
        ],
    )
    def test_lakh_crore_grouping(self, amount: int, expected: str) -> None:
        assert group_indian(amount) == expected


class TestFormatInr:
    def test_full(self) -> None:
        assert format_inr(4_005_549) == "₹40,05,549"

    def test_rounds_paise(self) -> None:
        assert format_inr(1234.6) == "₹1,235"

    def test_compact_lakh(self) -> None:
        assert format_inr_compact(4_005_549) == "₹40.06 L"

    def test_compact_crore(self) -> None:
        assert format_inr_compact(12_000_000) == "₹1.20 Cr"

    def test_compact_below_lakh(self) -> None:
        assert format_inr_compact(99_999) == "₹99,999"


class TestLabels:
    def test_area(self) -> None:
        assert format_area(1000, "sqft") == "1,000 sqft"
        assert format_area(92.9, "sqm") == "93 sqm"

    @pytest.mark.parametrize(
        ("months", "expected"),
        [(1.0, "1 month"), (8.5, "8.5 months"), (11.0, "11 months"), (0.5, "0.5 months")],
    )
    def test_months(self, months: float, expected: str) -> None:
        assert format_months(months) == expected
