"""
I Ching Module.

Three-coin casting of a six-line figure, interpretation through an external
oracle, and assembly of the reading with the cast lines.
"""

from modules.iching.core.assembler import assemble_figure
from modules.iching.core.coins import LineValue, encode_line, is_moving, toss_coins
from modules.iching.core.data_models import (
    AssembledFigure,
    AssembledFigureLine,
    CastLine,
    OracleChartRow,
    OracleInterpretation,
    TransformedFigureLine,
)
from modules.iching.core.divination import DivinationSession
from modules.iching.core.exceptions import (
    GatewayError,
    IChingError,
    JoinError,
    SequenceError,
    ValidationError,
)
from modules.iching.core.gateway import (
    GeminiInterpretationGateway,
    InterpretationGateway,
    build_request,
)
from modules.iching.core.image_generator import create_figure_image
from modules.iching.core.session import Phase, SessionState

__all__ = [
    # Casting
    "LineValue",
    "encode_line",
    "is_moving",
    "toss_coins",
    "CastLine",
    # Session
    "Phase",
    "SessionState",
    "DivinationSession",
    # Oracle
    "InterpretationGateway",
    "GeminiInterpretationGateway",
    "build_request",
    "OracleChartRow",
    "OracleInterpretation",
    # Assembly
    "assemble_figure",
    "AssembledFigure",
    "AssembledFigureLine",
    "TransformedFigureLine",
    # Image generation
    "create_figure_image",
    # Errors
    "IChingError",
    "ValidationError",
    "SequenceError",
    "GatewayError",
    "JoinError",
]
