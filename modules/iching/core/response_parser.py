"""
Helpers for parsing oracle responses into OracleInterpretation objects.
"""

import json
import re
from typing import Optional

from modules.common.ui.logging import log_warn
from modules.iching.core.data_models import OracleInterpretation
from modules.iching.core.exceptions import GatewayError


def extract_json_from_response(response_text: str) -> Optional[str]:
    """
    Extract the first complete JSON object from response text.

    Handles markdown code fences and leading/trailing prose. Braces inside
    JSON strings are skipped while matching.

    Args:
        response_text: Raw text returned by the oracle

    Returns:
        JSON string if found, None otherwise
    """
    if not response_text:
        return None
    text = response_text.strip()
    text = re.sub(r"^```(?:json)?\s*", "", text, flags=re.IGNORECASE)
    text = re.sub(r"\s*```$", "", text)

    start_idx = text.find("{")
    if start_idx == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start_idx, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start_idx : i + 1].strip()

    log_warn("Response contains an unterminated JSON object")
    return None


def parse_interpretation(response_text: str) -> OracleInterpretation:
    """
    Parse oracle text into an OracleInterpretation.

    Raises:
        GatewayError: If no JSON object is present or it does not match the schema
    """
    json_text = extract_json_from_response(response_text)
    if not json_text:
        raise GatewayError("Oracle response did not contain a JSON object")

    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise GatewayError(f"Oracle response is not valid JSON: {e}", cause=e) from e

    if not isinstance(data, dict):
        raise GatewayError("Oracle response JSON must be an object")

    try:
        return OracleInterpretation.from_dict(data)
    except KeyError as e:
        raise GatewayError(f"Oracle response is missing field {e}", cause=e) from e
    except (TypeError, ValueError, AttributeError) as e:
        raise GatewayError(f"Oracle response is malformed: {e}", cause=e) from e
