"""
Figure assembly: join locally cast lines with the oracle's chart rows.

The cast coins are authoritative for which lines move; the oracle's labels are
annotations only. A position missing from the oracle's chart is reported as a
JoinError and rendered unannotated.
"""

from typing import List, Sequence

from modules.common.ui.logging import log_debug, log_warn
from modules.iching.core.data_models import (
    AssembledFigure,
    AssembledFigureLine,
    CastLine,
    OracleInterpretation,
    TransformedFigureLine,
)
from modules.iching.core.exceptions import JoinError


def assemble_figure(lines: Sequence[CastLine], interpretation: OracleInterpretation) -> AssembledFigure:
    """
    Build the presentation-ready figure.

    Args:
        lines: Locally cast lines (any order; positions must be unique)
        interpretation: Oracle reading

    Returns:
        AssembledFigure with lines and transformed rows ordered top (position 6) first
    """
    join_errors: List[JoinError] = []
    assembled: List[AssembledFigureLine] = []

    for line in sorted(lines, key=lambda item: item.position, reverse=True):
        row = interpretation.primary_row(line.position)
        if row is None:
            error = JoinError(line.position)
            join_errors.append(error)
            log_warn(str(error))
        figure_line = AssembledFigureLine(
            position=line.position,
            value=line.value,
            is_moving=line.value.is_moving,
            chart_row=row,
        )
        if figure_line.label_disagrees:
            log_debug(
                f"Line {line.position}: oracle labels it '{row.line_type_label}' "
                f"but cast value is {int(line.value)}"
            )
        assembled.append(figure_line)

    moving = {line.position: line.is_moving for line in assembled}
    transformed: List[TransformedFigureLine] = []
    if interpretation.has_transformed:
        for row in sorted(interpretation.transformed_chart, key=lambda item: item.position, reverse=True):
            if row.position not in moving:
                join_errors.append(JoinError(row.position, chart="local"))
                log_warn(f"Transformed row at position {row.position} has no cast line")
                continue
            transformed.append(
                TransformedFigureLine(position=row.position, chart_row=row, inactive=not moving[row.position])
            )
        for position in moving:
            if interpretation.transformed_row(position) is None:
                error = JoinError(position, chart="transformed")
                join_errors.append(error)
                log_warn(str(error))

    return AssembledFigure(
        lines=tuple(assembled),
        interpretation=interpretation,
        transformed=tuple(transformed),
        join_errors=tuple(join_errors),
    )
