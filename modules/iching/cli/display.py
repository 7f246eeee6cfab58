"""
Console rendering of casting progress and assembled figures.
"""

from datetime import date
from typing import List, Optional

from colorama import Fore, Style

from config.iching import NUM_LINES
from modules.common.ui.formatting import color_text, indent_block
from modules.iching.core.data_models import AssembledFigure, OracleChartRow
from modules.iching.core.session import SessionState

BEAST_COLORS = {
    "青龙": Fore.GREEN,
    "朱雀": Fore.RED,
    "勾陈": Fore.YELLOW,
    "螣蛇": Fore.MAGENTA,
    "白虎": Fore.WHITE,
    "玄武": Fore.BLUE,
}

EMPTY_SLOT = "- - - - - - -"


def beast_color(label: str) -> str:
    for name, color in BEAST_COLORS.items():
        if name in label:
            return color
    return Fore.LIGHTBLACK_EX


def _shi_ying_marker(row: Optional[OracleChartRow]) -> str:
    if row is None:
        return "  "
    if row.is_shi:
        return color_text("世", Fore.RED, Style.BRIGHT)
    if row.is_ying:
        return "应"
    return "  "


def render_progress(state: SessionState) -> str:
    """Lines cast so far, top first, with dashed slots for uncast positions."""
    rows: List[str] = []
    for position in range(NUM_LINES, 0, -1):
        line = next((item for item in state.cast_lines if item.position == position), None)
        if line is None:
            rows.append(color_text(f"{position}  {EMPTY_SLOT}", Fore.LIGHTBLACK_EX))
        else:
            color = Fore.RED if line.is_moving else Fore.WHITE
            rows.append(f"{position}  " + color_text(line.value.symbol, color, Style.BRIGHT))
    return "\n".join(rows)


def render_chart(figure: AssembledFigure, today: Optional[date] = None) -> str:
    """Header, primary chart and (when present) transformed chart."""
    interpretation = figure.interpretation
    header = interpretation.header
    today = today or date.today()

    out: List[str] = [
        color_text(f"{header.name}  {header.pinyin}".strip(), Fore.WHITE, Style.BRIGHT),
        f"公历 {today.isoformat()}  {interpretation.date_info.lunar}  空亡: {interpretation.date_info.kong_wang}",
        f"{header.palace}  {header.category}".strip(),
        "",
    ]

    transformed = {line.position: line for line in figure.transformed}
    for line in figure.lines:
        row = line.chart_row
        if row is None:
            left = color_text("(no chart data)".ljust(24), Fore.LIGHTBLACK_EX)
        else:
            beast = color_text(row.beast_label.ljust(3), beast_color(row.beast_label))
            # pad before colouring; ANSI codes count toward format widths
            stem = f"{row.stem_branch_label:>8}"
            if line.is_moving:
                stem = color_text(stem, Fore.RED, Style.BRIGHT)
            left = f"{beast} {row.kinship_label:<4} {stem}"
        bar = color_text(line.value.symbol, Fore.RED if line.is_moving else Fore.WHITE, Style.BRIGHT)
        text = f"{left}  {bar}  {_shi_ying_marker(row)}"

        if figure.show_transformed and line.position in transformed:
            t_line = transformed[line.position]
            t_row = t_line.chart_row
            t_text = f"{t_line.display_value.symbol}  {t_row.stem_branch_label} {t_row.kinship_label}"
            if t_line.inactive:
                t_text = color_text(t_text, Fore.LIGHTBLACK_EX, Style.DIM)
            else:
                t_text = color_text(t_text, Fore.WHITE, Style.BRIGHT)
            text += "  ->  " + t_text
        out.append(text)

    return "\n".join(out)


def render_analysis(figure: AssembledFigure) -> str:
    analysis = figure.interpretation.analysis
    out: List[str] = [
        color_text("吉凶总断", Fore.RED, Style.BRIGHT),
        indent_block(analysis.summary),
        "",
        color_text("断卦详解", Fore.WHITE, Style.BRIGHT),
    ]
    for detail in analysis.details:
        out.append(color_text(f"[{detail.title}]", Fore.CYAN))
        out.append(indent_block(detail.content))
    out.extend(["", color_text("趋吉避凶", Fore.YELLOW, Style.BRIGHT), indent_block(analysis.advice)])
    return "\n".join(out)
