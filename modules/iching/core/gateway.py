"""
Interpretation gateway: the boundary to the external oracle.

The core hands the gateway an immutable snapshot of the question and the six
cast lines and awaits a single OracleInterpretation. Calls are at-most-once;
retry belongs to the caller.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence, Tuple

from google import genai

from config.iching import GEMINI_MODEL, GEMINI_TEMPERATURE, NUM_LINES
from modules.common.ui.logging import log_oracle, log_success
from modules.iching.core.coins import LINE_LABELS
from modules.iching.core.data_models import CastLine, OracleInterpretation
from modules.iching.core.exceptions import GatewayError, SequenceError
from modules.iching.core.response_parser import parse_interpretation

logger = logging.getLogger(__name__)


def snapshot_lines(lines: Sequence[CastLine]) -> Tuple[CastLine, ...]:
    """
    Freeze the line sequence handed to a gateway.

    Raises:
        SequenceError: Unless there are exactly six lines at positions 1..6 in order
    """
    snapshot = tuple(lines)
    if len(snapshot) != NUM_LINES:
        raise SequenceError(f"Gateway requires exactly {NUM_LINES} lines, got {len(snapshot)}")
    positions = [line.position for line in snapshot]
    if positions != list(range(1, NUM_LINES + 1)):
        raise SequenceError(f"Gateway requires positions 1..{NUM_LINES} in casting order, got {positions}")
    return snapshot


def build_request(question: str, lines: Sequence[CastLine]) -> Dict[str, Any]:
    """Request payload: {question, lines: [{position, value}] x 6}."""
    return {
        "question": question,
        "lines": [line.to_request() for line in snapshot_lines(lines)],
    }


class InterpretationGateway(ABC):
    """Contract for oracle adapters."""

    @abstractmethod
    async def interpret(self, question: str, lines: Tuple[CastLine, ...]) -> OracleInterpretation:
        """
        Interpret a complete figure.

        Args:
            question: The question asked at session start
            lines: Snapshot of the six cast lines, bottom line first

        Returns:
            OracleInterpretation

        Raises:
            GatewayError: On network failure, remote rejection or malformed response
        """


def _extract_text(response: Any) -> Optional[str]:
    """Pull the text payload out of a generate_content response."""
    text = getattr(response, "text", None)
    if isinstance(text, str):
        return text
    candidates = getattr(response, "candidates", None)
    if candidates:
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        joined = "".join(part.text for part in parts if isinstance(getattr(part, "text", None), str))
        if joined:
            return joined
    return None


class GeminiInterpretationGateway(InterpretationGateway):
    """Oracle backed by Google Gemini, asked to return the chart as JSON."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        """
        Args:
            api_key: Google Gemini API key (if None, read from config.config_api)
            model_name: Gemini model (default from config.iching)
            temperature: Sampling temperature (default from config.iching)

        Raises:
            ValueError: If no API key is available
        """
        if api_key is None:
            from config.config_api import GEMINI_API_KEY

            api_key = GEMINI_API_KEY
        if not api_key:
            raise ValueError("GEMINI_API_KEY is not set. Export it or pass api_key explicitly.")

        self.client = genai.Client(api_key=api_key)
        self.model_name = model_name or GEMINI_MODEL
        self.temperature = GEMINI_TEMPERATURE if temperature is None else max(0.0, min(1.0, temperature))

    async def interpret(self, question: str, lines: Tuple[CastLine, ...]) -> OracleInterpretation:
        request = build_request(question, lines)
        prompt = self._create_prompt(request)
        log_oracle(f"Sending figure {[line['value'] for line in request['lines']]} to {self.model_name}")

        try:
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.model_name,
                contents=prompt,
                config={
                    "temperature": self.temperature,
                    "response_mime_type": "application/json",
                },
            )
        except Exception as e:
            logger.exception("Gemini request failed")
            raise GatewayError(f"Interpretation request failed: {e}", cause=e) from e

        text = _extract_text(response)
        if not text:
            raise GatewayError("Interpretation service returned an empty response")

        interpretation = parse_interpretation(text)
        log_success(f"Received reading for {interpretation.header.name}")
        return interpretation

    def _create_prompt(self, request: Dict[str, Any]) -> str:
        """Build the oracle prompt from a request payload."""
        described = "\n".join(
            f"- 第{line['position']}爻 (position {line['position']}): {line['value']} "
            f"{LINE_LABELS.get(line['value'], '')}"
            for line in request["lines"]
        )
        payload = json.dumps(request, ensure_ascii=False)
        return f"""You are a master of 六爻 (Liu Yao) divination using the 纳甲 method and the 文王金钱课 three-coin cast.

The querent asked: "{request['question']}"

The figure was cast bottom-up (position 1 = bottom line, position 6 = top line):
{described}

Line values: 6 = 老阴 (changing yin), 7 = 少阳, 8 = 少阴, 9 = 老阳 (changing yang).

Request payload:
{payload}

Tasks:
1. Name the primary hexagram (本卦), its palace (宫 and element) and category (六合/六冲/游魂/归魂 ...).
2. Give today's lunar date (年 月 日 干支) and the void branches (空亡).
3. For every line of the primary hexagram give 六亲, 纳甲干支 with element, 世/应 marker, 六兽 and the line type (少阳/少阴/老阳/老阴).
4. If and only if there are changing lines (6 or 9), give the transformed hexagram (之卦) rows; otherwise transformStack must be null.
5. Analyse the question: a one-sentence verdict, detailed sections, and practical advice.

Return ONLY valid JSON in Simplified Chinese, no markdown, with exactly this shape:
{{
  "hexagramHeader": {{"name": "水火既济", "pinyin": "Shui Huo Ji Ji", "palace": "坎宫 (属水)", "category": "三世卦"}},
  "dateInfo": {{"lunar": "甲辰年 酉月 戌日", "kongWang": "(子丑空)"}},
  "mainStack": [
    {{"position": 6, "liuQin": "兄弟", "ganZhi": "戊子 水", "shiYing": "应", "liuShou": "玄武", "type": "少阴"}}
  ],
  "transformStack": null,
  "analysis": {{
    "summary": "...",
    "details": [{{"title": "用神", "content": "..."}}],
    "advice": "..."
  }}
}}

mainStack (and transformStack when present) must list all six positions, from position 6 down to position 1."""
