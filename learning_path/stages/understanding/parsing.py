"""
Strict parsing of completion output into an Understanding.

JSON may arrive bare, inside a markdown code block, or surrounded by text; the
object found is then validated against the full Understanding schema. Any
failure raises CapabilityError so the caller can use the fallback instead of a
partially trusted parse.
"""

import json
import re
from typing import Any, Dict

from pydantic import ValidationError

from ...errors import CapabilityError
from ...models.understanding import Understanding
from .prompt import ANALYSIS_TASK

_FENCED = re.compile(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```")
_OBJECT = re.compile(r"\{[\s\S]*\}")


def parse_json_response(content: str) -> Dict[str, Any]:
    """
    Parse a JSON object from completion output.

    Raises:
        ValueError: If no JSON object can be decoded
    """
    content = (content or "").strip()

    try:
        parsed = json.loads(content)
        if isinstance(parsed, dict):
            return parsed
    except json.JSONDecodeError:
        pass

    for pattern in (_FENCED, _OBJECT):
        match = pattern.search(content)
        if not match:
            continue
        try:
            parsed = json.loads(match.group(1) if match.groups() else match.group())
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    raise ValueError(f"Could not parse JSON from response: {content[:200]}...")


def parse_understanding(content: str, model_id: str) -> Understanding:
    """Validate completion output as an Understanding tagged with model_id."""
    try:
        payload = parse_json_response(content)
    except ValueError as e:
        raise CapabilityError(str(e), task_type=ANALYSIS_TASK) from e

    payload.pop("analysisModel", None)
    payload.pop("modelId", None)
    payload["model_id"] = model_id
    try:
        return Understanding.model_validate(payload)
    except ValidationError as e:
        raise CapabilityError(
            f"Interpretation failed schema validation ({e.error_count()} errors)",
            task_type=ANALYSIS_TASK,
        ) from e
