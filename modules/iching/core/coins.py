"""
Coin casting: three-coin toss simulation and the coin-to-line encoding.
"""

import random
from enum import IntEnum
from typing import Optional, Sequence, Tuple

from config.iching import COIN_COUNT, HEADS_WEIGHT, MOVING_VALUES, TAILS_WEIGHT

CoinTriplet = Tuple[bool, bool, bool]


class LineValue(IntEnum):
    """Value of one cast line: the sum of three coin weights."""

    OLD_YIN = 6  # ---x--- changing into yang
    YOUNG_YANG = 7  # ------- stable yang
    YOUNG_YIN = 8  # --- --- stable yin
    OLD_YANG = 9  # ---o--- changing into yin

    @property
    def is_moving(self) -> bool:
        return int(self) in MOVING_VALUES

    @property
    def is_yang(self) -> bool:
        return self in (LineValue.YOUNG_YANG, LineValue.OLD_YANG)

    @property
    def symbol(self) -> str:
        return LINE_SYMBOLS[self]


LINE_SYMBOLS = {
    LineValue.OLD_YIN: "---x---",
    LineValue.YOUNG_YANG: "-------",
    LineValue.YOUNG_YIN: "--- ---",
    LineValue.OLD_YANG: "---o---",
}

LINE_LABELS = {
    LineValue.OLD_YIN: "老阴",
    LineValue.YOUNG_YANG: "少阳",
    LineValue.YOUNG_YIN: "少阴",
    LineValue.OLD_YANG: "老阳",
}


def encode_line(coins: Sequence[bool]) -> LineValue:
    """
    Encode one coin triplet into a line value.

    Heads weigh 3 and tails weigh 2, so three heads give 9 (old yang), three
    tails give 6 (old yin), two heads give 8 and one head gives 7.

    Args:
        coins: Three coin outcomes, True for heads

    Returns:
        LineValue equal to the sum of the coin weights
    """
    return LineValue(sum(HEADS_WEIGHT if is_heads else TAILS_WEIGHT for is_heads in coins))


def is_moving(value: int) -> bool:
    """Whether a line value is a changing line (6 or 9)."""
    return int(value) in MOVING_VALUES


def toss_coins(rng: Optional[random.Random] = None) -> CoinTriplet:
    """Simulate one toss of three coins. Pass a seeded rng for reproducible casts."""
    rng = rng or random
    heads = tuple(rng.choice([True, False]) for _ in range(COIN_COUNT))
    return heads  # type: ignore[return-value]


def format_coins(coins: Sequence[bool]) -> str:
    """Render a triplet as H/T letters, e.g. 'HHT'."""
    return "".join("H" if is_heads else "T" for is_heads in coins)
