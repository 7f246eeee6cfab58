"""
Divination session driver.

Owns the single SessionState of one interactive run and applies the pure
transitions from modules.iching.core.session in order. The only suspending
operation is the gateway call; while it is in flight the phase is
INTERPRETING, which rejects casting and a second request.
"""

import asyncio
from typing import Optional, Sequence

from modules.common.ui.logging import log_cast, log_error, log_info, log_success, log_warn
from modules.iching.core import session as transitions
from modules.iching.core.assembler import assemble_figure
from modules.iching.core.coins import format_coins
from modules.iching.core.data_models import AssembledFigure, CastLine, OracleInterpretation
from modules.iching.core.exceptions import GatewayError, SequenceError
from modules.iching.core.gateway import InterpretationGateway, snapshot_lines
from modules.iching.core.session import Phase, SessionState


class DivinationSession:
    """One casting session: question -> six tosses -> oracle reading."""

    def __init__(self, gateway: Optional[InterpretationGateway] = None):
        self.gateway = gateway
        self._state = transitions.new_session()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    def begin(self, question: str) -> SessionState:
        self._state = transitions.begin(self._state, question)
        log_info(f"Question accepted, casting started: {question.strip()}")
        return self._state

    def cast_line(self, coins: Sequence[bool]) -> CastLine:
        """Apply one physical toss; returns the new line."""
        self._state = transitions.cast_line(self._state, coins)
        line = self._state.cast_lines[-1]
        marker = " (moving)" if line.is_moving else ""
        log_cast(f"Line {line.position}: {format_coins(line.coins)} -> {int(line.value)} {line.value.symbol}{marker}")
        if self._state.phase is Phase.AWAITING_INTERPRETATION:
            log_success("Figure complete")
        return line

    async def request_interpretation(self) -> OracleInterpretation:
        """
        Send the complete figure to the gateway.

        Returns:
            The stored OracleInterpretation (phase RESULT)

        Raises:
            SequenceError: If not in AWAITING_INTERPRETATION or no gateway is configured
            GatewayError: After the session has returned to AWAITING_INTERPRETATION with last_error set
        """
        if self.gateway is None:
            raise SequenceError("No interpretation gateway configured")
        pending = transitions.start_interpretation(self._state)
        self._state = pending
        lines = snapshot_lines(pending.cast_lines)

        try:
            interpretation = await self.gateway.interpret(pending.question, lines)
        except GatewayError as e:
            if self._state is pending:
                self._state = transitions.fail_interpretation(pending, e.message)
            log_error(f"Interpretation failed: {e.message}")
            raise
        except (asyncio.CancelledError, Exception):
            if self._state is pending:
                self._state = transitions.abandon_interpretation(pending)
            log_warn("Interpretation abandoned, figure kept")
            raise

        if self._state is not pending:
            # reset() ran while the call was in flight
            raise SequenceError("Session was reset before the interpretation arrived")
        self._state = transitions.complete_interpretation(pending, interpretation)
        return interpretation

    def assemble(self) -> AssembledFigure:
        """Joined view of the cast lines and the stored reading (phase RESULT)."""
        if self._state.phase is not Phase.RESULT or self._state.interpretation is None:
            raise SequenceError(f"assemble requires phase RESULT, current phase is {self._state.phase.value}")
        return assemble_figure(self._state.cast_lines, self._state.interpretation)

    def reset(self) -> SessionState:
        self._state = transitions.reset(self._state)
        log_info("Session reset")
        return self._state
