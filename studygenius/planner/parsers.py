"""
Parsing of model output into JSON objects.

``repair_and_parse`` tries the strategies in ``REPAIR_STRATEGIES`` in order
and returns the first JSON object that parses:

1. ``direct``        - the text as-is
2. ``cleaned``       - ``//`` and ``/* */`` comments and trailing commas
                       before ``}``/``]`` removed (string literals untouched)
3. ``outer_object``  - the outermost ``{...}`` span, parsed as-is and then
                       cleaned

``parse_model_response`` applies the chain to a chat model response: the
structured-call arguments first, then the free-text body.
"""

import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from studygenius.core.llm_utils import extract_content_as_string, get_structured_call_arguments
from studygenius.planner.errors import PlanParseError

logger = logging.getLogger(__name__)

# A JSON string literal, matched first so comment and comma patterns never fire inside strings
_STRING = r'"(?:\\.|[^"\\])*"'
_COMMENT_PATTERN = re.compile(rf'({_STRING})|//[^\n]*|/\*.*?\*/', re.DOTALL)
_TRAILING_COMMA_PATTERN = re.compile(rf'({_STRING})|,(\s*[}}\]])')
_OUTER_OBJECT_PATTERN = re.compile(r'\{.*\}', re.DOTALL)


def strip_json_comments(text: str) -> str:
    return _COMMENT_PATTERN.sub(lambda m: m.group(1) or "", text)


def remove_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA_PATTERN.sub(lambda m: m.group(1) or m.group(2), text)


def clean_json_text(text: str) -> str:
    """Remove comments, then trailing commas."""
    return remove_trailing_commas(strip_json_comments(text))


def _load_object(text: str) -> Dict[str, Any]:
    parsed = json.loads(text)
    if not isinstance(parsed, dict):
        raise ValueError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _parse_direct(text: str) -> Dict[str, Any]:
    return _load_object(text)


def _parse_cleaned(text: str) -> Dict[str, Any]:
    return _load_object(clean_json_text(text))


def _parse_outer_object(text: str) -> Dict[str, Any]:
    match = _OUTER_OBJECT_PATTERN.search(text)
    if not match:
        raise ValueError("no {...} span found")
    span = match.group(0)
    try:
        return _load_object(span)
    except ValueError:
        return _load_object(clean_json_text(span))


REPAIR_STRATEGIES: Tuple[Tuple[str, Callable[[str], Dict[str, Any]]], ...] = (
    ("direct", _parse_direct),
    ("cleaned", _parse_cleaned),
    ("outer_object", _parse_outer_object),
)


def repair_and_parse_with_strategy(text: str) -> Tuple[str, Dict[str, Any]]:
    """
    Run the repair chain and report which strategy succeeded.

    Returns:
        (strategy name, parsed object)

    Raises:
        PlanParseError: if no strategy produced a JSON object
    """
    attempts: List[Tuple[str, str]] = []
    for name, strategy in REPAIR_STRATEGIES:
        try:
            return name, strategy(text)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            attempts.append((name, str(e)))
    raise PlanParseError(text, attempts)


def repair_and_parse(text: str) -> Dict[str, Any]:
    """Parse model text into a JSON object, repairing it if needed."""
    strategy, parsed = repair_and_parse_with_strategy(text)
    if strategy != "direct":
        logger.info(f"Model output parsed after repair ({strategy})")
    return parsed


def raw_response_text(response) -> str:
    """Best raw text of a response for diagnostics: body text, else the raw call arguments."""
    text = extract_content_as_string(response).strip()
    if text:
        return text
    args = get_structured_call_arguments(response)
    if isinstance(args, str):
        return args
    if isinstance(args, dict):
        return json.dumps(args)
    return ""


def parse_model_response(response, function_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Turn a tool-bound chat model response into a JSON object.

    Order:
    1. Structured-call arguments (already a dict, or a raw string that goes
       through ``repair_and_parse``)
    2. The free-text body through ``repair_and_parse``

    Raises:
        PlanParseError: if neither source yields a JSON object
    """
    args = get_structured_call_arguments(response, function_name)
    if isinstance(args, dict) and args:
        return args

    attempts: List[Tuple[str, str]] = []
    if isinstance(args, str):
        try:
            return repair_and_parse(args)
        except PlanParseError as e:
            logger.warning("Structured call arguments were not valid JSON, trying response text")
            attempts.extend((f"arguments/{name}", error) for name, error in e.attempts)

    text = extract_content_as_string(response).strip()
    if not text:
        attempts.append(("content", "empty response body"))
        raise PlanParseError(raw_response_text(response), attempts)

    try:
        return repair_and_parse(text)
    except PlanParseError as e:
        raise PlanParseError(text, attempts + e.attempts) from e
