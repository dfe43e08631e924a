"""Utility functions for LLM Core library."""

import json
import re
from typing import Any, Optional

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def is_failed_response(content: Optional[str]) -> bool:
    """Check if an LLM response indicates a failure.

    A response is considered failed if:
    - It is None
    - It is empty or contains only whitespace
    - It starts with "Error:"

    Args:
        content: The response content to check

    Returns:
        bool: True if the response indicates a failure, False otherwise
    """
    if content is None:
        return True
    if not content or not content.strip():
        return True
    if content.strip().startswith("Error:"):
        return True
    return False


def extract_json_text(content: str) -> str:
    """Pull the JSON payload out of a model response.

    Handles responses wrapped in Markdown code fences and responses with
    prose around a single JSON object or array.
    """
    fenced = _FENCE_PATTERN.search(content)
    if fenced:
        return fenced.group(1).strip()

    starts = [i for i in (content.find("{"), content.find("[")) if i != -1]
    if not starts:
        return content.strip()
    start = min(starts)
    closer = "}" if content[start] == "{" else "]"
    end = content.rfind(closer)
    if end <= start:
        return content[start:].strip()
    return content[start : end + 1]


def parse_json_response(content: str) -> Any:
    """Decode the JSON payload of a model response.

    Raises:
        ValueError: If no valid JSON can be decoded.
    """
    try:
        return json.loads(extract_json_text(content))
    except json.JSONDecodeError as e:
        raise ValueError(f"Response is not valid JSON: {e}") from e
