"""Core I Ching functionality."""

from modules.iching.core.coins import LineValue, encode_line
from modules.iching.core.session import Phase, SessionState

__all__ = [
    "LineValue",
    "encode_line",
    "Phase",
    "SessionState",
]
