"""
Tests for coin tossing and line encoding.
"""

import itertools
import random
from collections import Counter

import pytest

from modules.iching.core.coins import (
    LINE_LABELS,
    LineValue,
    encode_line,
    format_coins,
    is_moving,
    toss_coins,
)

H = True
T = False


class TestEncodeLine:
    """Test encode_line function."""

    @pytest.mark.parametrize(
        "coins,expected",
        [
            ((H, H, H), 9),
            ((T, T, T), 6),
            ((H, H, T), 8),
            ((H, T, H), 8),
            ((T, H, H), 8),
            ((H, T, T), 7),
            ((T, H, T), 7),
            ((T, T, H), 7),
        ],
    )
    def test_all_triplets(self, coins, expected):
        assert encode_line(coins) == expected

    def test_order_does_not_matter(self):
        for triplet in itertools.product([H, T], repeat=3):
            assert encode_line(triplet) == encode_line(tuple(sorted(triplet)))

    def test_multiplicities(self):
        """Over the eight outcomes: 6 and 9 once each, 7 and 8 three times each."""
        counts = Counter(int(encode_line(t)) for t in itertools.product([H, T], repeat=3))
        assert counts == {6: 1, 7: 3, 8: 3, 9: 1}

    def test_returns_line_value(self):
        assert isinstance(encode_line((H, H, H)), LineValue)
        assert encode_line((H, H, H)) is LineValue.OLD_YANG


class TestLineValue:
    """Test LineValue properties."""

    def test_moving(self):
        assert LineValue.OLD_YIN.is_moving
        assert LineValue.OLD_YANG.is_moving
        assert not LineValue.YOUNG_YANG.is_moving
        assert not LineValue.YOUNG_YIN.is_moving

    def test_is_moving_function(self):
        assert [v for v in range(6, 10) if is_moving(v)] == [6, 9]

    def test_polarity(self):
        assert LineValue.YOUNG_YANG.is_yang
        assert LineValue.OLD_YANG.is_yang
        assert not LineValue.YOUNG_YIN.is_yang
        assert not LineValue.OLD_YIN.is_yang

    def test_symbols_distinct(self):
        symbols = {value.symbol for value in LineValue}
        assert len(symbols) == 4
        assert LineValue.OLD_YIN.symbol == "---x---"
        assert LineValue.OLD_YANG.symbol == "---o---"

    def test_labels(self):
        assert LINE_LABELS[LineValue.OLD_YIN] == "老阴"
        assert LINE_LABELS[LineValue.YOUNG_YANG] == "少阳"


class TestTossCoins:
    """Test toss_coins function."""

    def test_returns_three_booleans(self):
        coins = toss_coins(random.Random(1))
        assert len(coins) == 3
        assert all(isinstance(c, bool) for c in coins)

    def test_seeded_is_reproducible(self):
        first = [toss_coins(random.Random(42)) for _ in range(1)]
        second = [toss_coins(random.Random(42)) for _ in range(1)]
        assert first == second

    def test_sequence_reproducible(self):
        rng_a = random.Random(7)
        rng_b = random.Random(7)
        assert [toss_coins(rng_a) for _ in range(6)] == [toss_coins(rng_b) for _ in range(6)]

    def test_default_rng(self):
        assert len(toss_coins()) == 3


class TestFormatCoins:
    def test_format(self):
        assert format_coins((H, H, T)) == "HHT"
        assert format_coins((T, T, T)) == "TTT"
