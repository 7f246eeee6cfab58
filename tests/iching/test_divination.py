"""
Tests for DivinationSession (async interpretation flow).
"""

import asyncio
import unittest
from unittest.mock import AsyncMock, patch

from modules.iching.core.data_models import OracleInterpretation
from modules.iching.core.divination import DivinationSession
from modules.iching.core.exceptions import GatewayError, SequenceError
from modules.iching.core.gateway import InterpretationGateway
from modules.iching.core.session import Phase
from tests.iching.factories import SCENARIO_TOSSES, H, make_interpretation_dict


class FakeGateway(InterpretationGateway):
    """Gateway whose reply is controlled by the test."""

    def __init__(self, result=None, error=None, gate=None):
        self.result = result
        self.error = error
        self.gate = gate
        self.calls = []

    async def interpret(self, question, lines):
        self.calls.append((question, lines))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


def _reading():
    return OracleInterpretation.from_dict(make_interpretation_dict(transformed_positions=(3, 2)))


def _cast_all(session):
    session.begin("Will the project succeed?")
    for coins in SCENARIO_TOSSES:
        session.cast_line(coins)


class TestDivinationSessionCasting(unittest.TestCase):
    """Synchronous driver behaviour."""

    @patch("modules.iching.core.divination.log_cast")
    def test_cast_line_returns_line(self, mock_log_cast):
        session = DivinationSession()
        session.begin("question")
        line = session.cast_line((H, H, H))
        assert line.position == 1
        assert int(line.value) == 9
        assert session.phase is Phase.CASTING
        mock_log_cast.assert_called_once()

    def test_six_casts_complete_figure(self):
        session = DivinationSession()
        _cast_all(session)
        assert session.phase is Phase.AWAITING_INTERPRETATION
        assert len(session.state.cast_lines) == 6

    def test_seventh_cast_rejected(self):
        session = DivinationSession()
        _cast_all(session)
        with self.assertRaises(SequenceError):
            session.cast_line((H, H, H))
        assert len(session.state.cast_lines) == 6

    def test_assemble_before_result(self):
        session = DivinationSession()
        _cast_all(session)
        with self.assertRaises(SequenceError):
            session.assemble()

    def test_reset(self):
        session = DivinationSession()
        _cast_all(session)
        state = session.reset()
        assert state.phase is Phase.INPUT
        assert state.cast_lines == ()
        assert state.question == ""


class TestDivinationSessionInterpretation(unittest.IsolatedAsyncioTestCase):
    """Async interpretation flow."""

    async def test_success_reaches_result(self):
        reading = _reading()
        gateway = FakeGateway(result=reading)
        session = DivinationSession(gateway)
        _cast_all(session)

        result = await session.request_interpretation()

        assert result is reading
        assert session.phase is Phase.RESULT
        assert session.state.interpretation is reading
        question, lines = gateway.calls[0]
        assert question == "Will the project succeed?"
        assert isinstance(lines, tuple)
        assert [line.position for line in lines] == [1, 2, 3, 4, 5, 6]

    async def test_assemble_after_result(self):
        session = DivinationSession(FakeGateway(result=_reading()))
        _cast_all(session)
        await session.request_interpretation()

        figure = session.assemble()
        assert [line.position for line in figure.lines] == [6, 5, 4, 3, 2, 1]
        assert figure.moving_positions == [2, 3]

    async def test_gateway_error_keeps_figure(self):
        session = DivinationSession(FakeGateway(error=GatewayError("service unavailable")))
        _cast_all(session)
        lines_before = session.state.cast_lines

        with self.assertRaises(GatewayError):
            await session.request_interpretation()

        assert session.phase is Phase.AWAITING_INTERPRETATION
        assert session.state.last_error == "service unavailable"
        assert session.state.has_failed
        assert session.state.cast_lines == lines_before
        assert session.state.interpretation is None

    async def test_retry_after_failure(self):
        gateway = FakeGateway(error=GatewayError("timeout"))
        session = DivinationSession(gateway)
        _cast_all(session)
        with self.assertRaises(GatewayError):
            await session.request_interpretation()

        gateway.error = None
        gateway.result = _reading()
        await session.request_interpretation()

        assert session.phase is Phase.RESULT
        assert session.state.last_error is None
        assert len(gateway.calls) == 2
        assert gateway.calls[0][1] == gateway.calls[1][1]

    async def test_request_before_figure_complete(self):
        session = DivinationSession(FakeGateway(result=_reading()))
        session.begin("question")
        session.cast_line((H, H, H))
        with self.assertRaises(SequenceError):
            await session.request_interpretation()
        assert session.phase is Phase.CASTING

    async def test_request_without_gateway(self):
        session = DivinationSession()
        _cast_all(session)
        with self.assertRaises(SequenceError):
            await session.request_interpretation()
        assert session.phase is Phase.AWAITING_INTERPRETATION

    async def test_in_flight_rejects_cast_and_second_request(self):
        gate = asyncio.Event()
        session = DivinationSession(FakeGateway(result=_reading(), gate=gate))
        _cast_all(session)

        task = asyncio.create_task(session.request_interpretation())
        await asyncio.sleep(0)
        assert session.phase is Phase.INTERPRETING

        with self.assertRaises(SequenceError):
            session.cast_line((H, H, H))
        with self.assertRaises(SequenceError):
            await session.request_interpretation()

        gate.set()
        await task
        assert session.phase is Phase.RESULT

    async def test_cancellation_returns_to_awaiting(self):
        gate = asyncio.Event()
        session = DivinationSession(FakeGateway(result=_reading(), gate=gate))
        _cast_all(session)

        task = asyncio.create_task(session.request_interpretation())
        await asyncio.sleep(0)
        task.cancel()
        with self.assertRaises(asyncio.CancelledError):
            await task

        assert session.phase is Phase.AWAITING_INTERPRETATION
        assert session.state.last_error is None
        assert len(session.state.cast_lines) == 6

    async def test_unexpected_error_returns_to_awaiting(self):
        session = DivinationSession(FakeGateway(error=RuntimeError("bug")))
        _cast_all(session)
        with self.assertRaises(RuntimeError):
            await session.request_interpretation()
        assert session.phase is Phase.AWAITING_INTERPRETATION
        assert session.state.last_error is None

    async def test_reset_during_flight_discards_late_reading(self):
        gate = asyncio.Event()
        session = DivinationSession(FakeGateway(result=_reading(), gate=gate))
        _cast_all(session)

        task = asyncio.create_task(session.request_interpretation())
        await asyncio.sleep(0)
        session.reset()
        gate.set()

        with self.assertRaises(SequenceError):
            await task
        assert session.phase is Phase.INPUT
        assert session.state.interpretation is None

    async def test_gateway_mock(self):
        gateway = AsyncMock(spec=InterpretationGateway)
        gateway.interpret.return_value = _reading()
        session = DivinationSession(gateway)
        _cast_all(session)

        await session.request_interpretation()

        gateway.interpret.assert_awaited_once()
        assert session.phase is Phase.RESULT


if __name__ == "__main__":
    unittest.main()
