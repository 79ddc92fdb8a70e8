from __future__ import annotations

import json
import math
import re
from typing import Any

from structlog import get_logger

from invoice_extractor.processing.records import ExtractedRecords

logger = get_logger(__name__)

_FENCE_RE = re.compile(r"```json|```")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

_FAMILY_KEYS = {
    "invoices": "Invoices",
    "products": "Products",
    "customers": "Customers",
}


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def locate_json_object(text: str) -> str:
    """Greedy first-`{` to last-`}` span, or the text itself when there is none."""
    match = _OBJECT_RE.search(text)
    return match.group(0) if match else text


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON and cannot be rendered back out
    raise ValueError(f"Non-standard JSON constant: {name}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {literal}")
    return value


def parse_model_json(text: str) -> dict[str, Any]:
    candidate = locate_json_object(strip_code_fences(text))
    try:
        parsed = json.loads(candidate, parse_constant=_reject_constant, parse_float=_finite_float)
    except ValueError as exc:
        logger.warning("model_json_parse_failed", error=str(exc), length=len(candidate))
        return {}
    if not isinstance(parsed, dict):
        logger.warning("model_json_not_object", type=type(parsed).__name__)
        return {}
    return parsed


def normalize_model_output(text: str) -> ExtractedRecords:
    """Turn free-form model output into the three record lists. Never raises."""
    parsed = parse_model_json(text or "")
    families: dict[str, list[Any]] = {}
    for name, key in _FAMILY_KEYS.items():
        value = parsed.get(key)
        if value is None:
            families[name] = []
        elif isinstance(value, list):
            families[name] = value
        else:
            logger.warning("model_family_not_list", key=key, type=type(value).__name__)
            families[name] = []
    return ExtractedRecords(**families)
