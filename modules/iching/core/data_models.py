"""
Data models for cast figures, oracle interpretations and assembled figures.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from config.iching import BEAST_STAMP_DELAY_MS, NUM_LINES, REVEAL_STAGGER_MS
from modules.iching.core.coins import CoinTriplet, LineValue, encode_line
from modules.iching.core.exceptions import JoinError

YIN_MARKERS = ("阴", "陰", "yin")
MOVING_WORDS = re.compile(r"\b(old|moving|changing)\b")


def _check_position(position: Any, owner: str) -> None:
    if isinstance(position, bool) or not isinstance(position, int) or position < 1 or position > NUM_LINES:
        raise ValueError(f"{owner}: position must be an integer in range 1-{NUM_LINES}, got {position!r}")


@dataclass(frozen=True)
class CastLine:
    """One line produced by a single toss; position 1 is the bottom."""

    position: int
    value: LineValue
    coins: CoinTriplet

    def __post_init__(self):
        _check_position(self.position, "CastLine")
        if len(self.coins) != 3:
            raise ValueError(f"CastLine: expected 3 coins, got {len(self.coins)}")
        if encode_line(self.coins) != self.value:
            raise ValueError(f"CastLine: value {int(self.value)} does not match coins {self.coins}")

    @property
    def is_moving(self) -> bool:
        return self.value.is_moving

    def to_request(self) -> Dict[str, int]:
        """Wire form sent to the oracle: position and value only."""
        return {"position": self.position, "value": int(self.value)}


@dataclass(frozen=True)
class OracleChartRow:
    """One row of a chart as annotated by the oracle (read-only input)."""

    position: int
    kinship_label: str  # 六亲, e.g. 妻财
    stem_branch_label: str  # 纳甲干支 + element, e.g. 戊子 水
    shi_ying_label: str  # 世 / 应 / empty
    beast_label: str  # 六兽, e.g. 青龙
    line_type_label: str  # 少阳 / 老阴 ...

    def __post_init__(self):
        _check_position(self.position, "OracleChartRow")

    @property
    def is_shi(self) -> bool:
        return "世" in self.shi_ying_label or "shi" in self.shi_ying_label.lower()

    @property
    def is_ying(self) -> bool:
        label = self.shi_ying_label
        return "应" in label or "應" in label or "ying" in label.lower()

    @property
    def is_yin_label(self) -> bool:
        label = self.line_type_label.lower()
        return any(marker in label for marker in YIN_MARKERS)

    @property
    def claims_moving(self) -> bool:
        """Whether the oracle's type label names a changing line (老阴/老阳, old yin/yang)."""
        label = self.line_type_label.lower()
        return "老" in label or MOVING_WORDS.search(label) is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "liuQin": self.kinship_label,
            "ganZhi": self.stem_branch_label,
            "shiYing": self.shi_ying_label,
            "liuShou": self.beast_label,
            "type": self.line_type_label,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OracleChartRow":
        # Coerce position to int - let ValueError bubble if conversion fails
        return cls(
            position=int(data["position"]),
            kinship_label=str(data.get("liuQin") or ""),
            stem_branch_label=str(data.get("ganZhi") or ""),
            shi_ying_label=str(data.get("shiYing") or ""),
            beast_label=str(data.get("liuShou") or ""),
            line_type_label=str(data.get("type") or ""),
        )


@dataclass(frozen=True)
class HexagramHeader:
    name: str
    pinyin: str = ""
    palace: str = ""
    category: str = ""


@dataclass(frozen=True)
class DateInfo:
    lunar: str = ""
    kong_wang: str = ""  # void branches, e.g. (子丑空)


@dataclass(frozen=True)
class AnalysisDetail:
    title: str
    content: str


@dataclass(frozen=True)
class Analysis:
    summary: str
    details: Tuple[AnalysisDetail, ...] = ()
    advice: str = ""


def _validate_chart(rows: Tuple[OracleChartRow, ...], chart: str) -> None:
    if len(rows) > NUM_LINES:
        raise ValueError(f"{chart} must have at most {NUM_LINES} rows, got {len(rows)}")
    positions = [row.position for row in rows]
    if len(set(positions)) != len(positions):
        raise ValueError(f"{chart} must not contain duplicate positions")


@dataclass(frozen=True)
class OracleInterpretation:
    """Reading returned by the interpretation oracle."""

    header: HexagramHeader
    date_info: DateInfo
    primary_chart: Tuple[OracleChartRow, ...]
    analysis: Analysis
    transformed_chart: Tuple[OracleChartRow, ...] = ()

    def __post_init__(self):
        if not self.header.name.strip():
            raise ValueError("header.name must be a non-empty string")
        _validate_chart(self.primary_chart, "primary_chart")
        _validate_chart(self.transformed_chart, "transformed_chart")

    @property
    def has_transformed(self) -> bool:
        """False when no moving line produced a transformed figure."""
        return len(self.transformed_chart) > 0

    def primary_row(self, position: int) -> Optional[OracleChartRow]:
        return next((row for row in self.primary_chart if row.position == position), None)

    def transformed_row(self, position: int) -> Optional[OracleChartRow]:
        return next((row for row in self.transformed_chart if row.position == position), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hexagramHeader": {
                "name": self.header.name,
                "pinyin": self.header.pinyin,
                "palace": self.header.palace,
                "category": self.header.category,
            },
            "dateInfo": {"lunar": self.date_info.lunar, "kongWang": self.date_info.kong_wang},
            "mainStack": [row.to_dict() for row in self.primary_chart],
            "transformStack": [row.to_dict() for row in self.transformed_chart] if self.has_transformed else None,
            "analysis": {
                "summary": self.analysis.summary,
                "details": [{"title": d.title, "content": d.content} for d in self.analysis.details],
                "advice": self.analysis.advice,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OracleInterpretation":
        """Build from the oracle's JSON. Raises KeyError/ValueError/TypeError on malformed data."""
        header_data = data["hexagramHeader"]
        date_data = data.get("dateInfo") or {}
        analysis_data = data["analysis"]

        primary = tuple(OracleChartRow.from_dict(row) for row in data.get("mainStack") or [])
        # transformStack may be null, missing or empty when no line moves
        transformed = tuple(OracleChartRow.from_dict(row) for row in data.get("transformStack") or [])

        details = tuple(
            AnalysisDetail(title=str(item.get("title", "")), content=str(item.get("content", "")))
            for item in analysis_data.get("details") or []
        )

        return cls(
            header=HexagramHeader(
                name=str(header_data.get("name") or ""),
                pinyin=str(header_data.get("pinyin") or ""),
                palace=str(header_data.get("palace") or ""),
                category=str(header_data.get("category") or ""),
            ),
            date_info=DateInfo(
                lunar=str(date_data.get("lunar") or ""),
                kong_wang=str(date_data.get("kongWang") or ""),
            ),
            primary_chart=primary,
            transformed_chart=transformed,
            analysis=Analysis(
                summary=str(analysis_data.get("summary") or ""),
                details=details,
                advice=str(analysis_data.get("advice") or ""),
            ),
        )


@dataclass(frozen=True)
class AssembledFigureLine:
    """A locally cast line joined with its oracle chart row."""

    position: int
    value: LineValue
    is_moving: bool
    chart_row: Optional[OracleChartRow]

    @property
    def display_index(self) -> int:
        """Index in the top-first display order (position 6 -> 0)."""
        return NUM_LINES - self.position

    @property
    def reveal_rank(self) -> int:
        """Staggered-reveal order: bottom line 0 (first), top line 5 (last)."""
        return self.position - 1

    @property
    def reveal_delay_ms(self) -> int:
        return self.reveal_rank * REVEAL_STAGGER_MS

    @property
    def beast_delay_ms(self) -> int:
        return self.reveal_delay_ms + BEAST_STAMP_DELAY_MS

    @property
    def is_annotated(self) -> bool:
        return self.chart_row is not None

    @property
    def label_disagrees(self) -> bool:
        """Oracle's type label disagrees with the locally derived moving flag (informational)."""
        if self.chart_row is None or not self.chart_row.line_type_label:
            return False
        return self.chart_row.claims_moving != self.is_moving


@dataclass(frozen=True)
class TransformedFigureLine:
    """A transformed-chart row gated by the moving flag of the local line at the same position."""

    position: int
    chart_row: OracleChartRow
    inactive: bool

    @property
    def is_changed(self) -> bool:
        return not self.inactive

    @property
    def display_value(self) -> LineValue:
        """Drawing value read from the oracle's type label."""
        return LineValue.YOUNG_YIN if self.chart_row.is_yin_label else LineValue.YOUNG_YANG

    @property
    def reveal_rank(self) -> int:
        return self.position - 1

    @property
    def reveal_delay_ms(self) -> int:
        return self.reveal_rank * REVEAL_STAGGER_MS


@dataclass(frozen=True)
class AssembledFigure:
    """Presentation-ready view; lines are ordered top of figure first."""

    lines: Tuple[AssembledFigureLine, ...]
    interpretation: OracleInterpretation
    transformed: Tuple[TransformedFigureLine, ...] = ()
    join_errors: Tuple[JoinError, ...] = field(default=())

    @property
    def show_transformed(self) -> bool:
        return len(self.transformed) > 0

    @property
    def moving_positions(self) -> List[int]:
        return sorted(line.position for line in self.lines if line.is_moving)

    def line_at(self, position: int) -> Optional[AssembledFigureLine]:
        return next((line for line in self.lines if line.position == position), None)
