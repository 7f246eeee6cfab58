"""
Casting state machine.

A session is a frozen SessionState value; every transition is a pure function
returning a new state, or raising without producing one (the caller keeps the
previous state unchanged).

    INPUT --begin--> CASTING --cast_line x6--> AWAITING_INTERPRETATION
    AWAITING_INTERPRETATION --start_interpretation--> INTERPRETING
    INTERPRETING --complete_interpretation--> RESULT
    INTERPRETING --fail_interpretation / abandon_interpretation--> AWAITING_INTERPRETATION
    any --reset--> INPUT
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple

from config.iching import NUM_LINES
from modules.iching.core.coins import encode_line
from modules.iching.core.data_models import CastLine, OracleInterpretation
from modules.iching.core.exceptions import SequenceError, ValidationError


class Phase(Enum):
    INPUT = "INPUT"
    CASTING = "CASTING"
    AWAITING_INTERPRETATION = "AWAITING_INTERPRETATION"
    INTERPRETING = "INTERPRETING"
    RESULT = "RESULT"


@dataclass(frozen=True)
class SessionState:
    phase: Phase = Phase.INPUT
    question: str = ""
    cast_lines: Tuple[CastLine, ...] = ()
    next_position: int = 1
    interpretation: Optional[OracleInterpretation] = None
    last_error: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return len(self.cast_lines) == NUM_LINES

    @property
    def has_failed(self) -> bool:
        """Failure sub-state of AWAITING_INTERPRETATION."""
        return self.phase is Phase.AWAITING_INTERPRETATION and self.last_error is not None


def new_session() -> SessionState:
    """Fresh session in the INPUT defaults."""
    return SessionState()


def _require_phase(state: SessionState, expected: Phase, operation: str) -> None:
    if state.phase is not expected:
        raise SequenceError(f"{operation} requires phase {expected.value}, current phase is {state.phase.value}")


def begin(state: SessionState, question: str) -> SessionState:
    """
    Accept the question and start casting.

    Raises:
        SequenceError: If not in INPUT
        ValidationError: If question is empty or whitespace-only
    """
    _require_phase(state, Phase.INPUT, "begin")
    if question is None or not question.strip():
        raise ValidationError("Question must not be empty")
    return SessionState(phase=Phase.CASTING, question=question, cast_lines=(), next_position=1)


def cast_line(state: SessionState, coins: Sequence[bool]) -> SessionState:
    """
    Append the line produced by one physical toss.

    No deduplication is performed: call exactly once per toss.

    Raises:
        SequenceError: If not in CASTING or six lines already exist
    """
    _require_phase(state, Phase.CASTING, "cast_line")
    if len(state.cast_lines) >= NUM_LINES:
        raise SequenceError(f"Cannot cast more than {NUM_LINES} lines")

    triplet = tuple(bool(c) for c in coins)
    line = CastLine(position=state.next_position, value=encode_line(triplet), coins=triplet)
    lines = state.cast_lines + (line,)
    phase = Phase.AWAITING_INTERPRETATION if len(lines) == NUM_LINES else Phase.CASTING
    return replace(state, phase=phase, cast_lines=lines, next_position=state.next_position + 1)


def start_interpretation(state: SessionState) -> SessionState:
    """
    Enter INTERPRETING; clears any previous failure message.

    Raises:
        SequenceError: If not in AWAITING_INTERPRETATION or the figure is incomplete
    """
    _require_phase(state, Phase.AWAITING_INTERPRETATION, "request_interpretation")
    if not state.is_complete:
        raise SequenceError(f"Interpretation requires {NUM_LINES} lines, have {len(state.cast_lines)}")
    return replace(state, phase=Phase.INTERPRETING, last_error=None)


def complete_interpretation(state: SessionState, interpretation: OracleInterpretation) -> SessionState:
    _require_phase(state, Phase.INTERPRETING, "complete_interpretation")
    return replace(state, phase=Phase.RESULT, interpretation=interpretation, last_error=None)


def fail_interpretation(state: SessionState, message: str) -> SessionState:
    """Return to AWAITING_INTERPRETATION carrying the failure; the figure is kept."""
    _require_phase(state, Phase.INTERPRETING, "fail_interpretation")
    return replace(state, phase=Phase.AWAITING_INTERPRETATION, last_error=message)


def abandon_interpretation(state: SessionState) -> SessionState:
    """Return to AWAITING_INTERPRETATION after a cancelled call, without an error message."""
    _require_phase(state, Phase.INTERPRETING, "abandon_interpretation")
    return replace(state, phase=Phase.AWAITING_INTERPRETATION)


def reset(state: Optional[SessionState] = None) -> SessionState:
    """Valid from any phase; discards lines, question, reading and error."""
    return new_session()


def check_invariants(state: SessionState) -> None:
    """Assert the line-sequence invariants; raises SequenceError on violation."""
    if len(state.cast_lines) != state.next_position - 1:
        raise SequenceError(
            f"cast_lines has {len(state.cast_lines)} lines but next_position is {state.next_position}"
        )
    if len(state.cast_lines) > NUM_LINES:
        raise SequenceError(f"cast_lines exceeds {NUM_LINES} lines")
    positions = [line.position for line in state.cast_lines]
    if positions != list(range(1, len(positions) + 1)):
        raise SequenceError(f"positions must be contiguous from 1, got {positions}")
