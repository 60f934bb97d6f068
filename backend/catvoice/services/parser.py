"""Extract and validate the JSON payload embedded in model output."""
import json
import logging
import re
from enum import Enum
from typing import Any, Iterable, Optional

from catvoice.core.errors import InvalidJSONError, MalformedResponseError

logger = logging.getLogger(__name__)

# Greedy: first "{" to last "}". Tolerates prose or code fences around the
# object, but two separate objects in one reply are taken as a single span.
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def extract_json(raw_text: str) -> dict[str, Any]:
    """Return the JSON object embedded in ``raw_text``.

    Raises:
        MalformedResponseError: No brace-delimited substring exists.
        InvalidJSONError: The substring is not a JSON object.
    """
    match = _JSON_OBJECT_RE.search(raw_text or "")
    if match is None:
        raise MalformedResponseError("No JSON object in model response", raw_text)
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise InvalidJSONError("Model response is not valid JSON", raw_text) from exc
    if not isinstance(data, dict):
        raise InvalidJSONError("Model response JSON is not an object", raw_text)
    return data


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_response(
    raw_text: str,
    fields: Iterable[str] = (),
    allowed_moods: Optional[type[Enum]] = None,
    fallback_mood: Optional[Enum] = None,
) -> dict[str, Any]:
    """Parse model output into a flat record.

    Each name in ``fields`` is returned as a string, "" when absent.
    When ``allowed_moods`` is given, ``mood`` is returned as a member of
    that enum; a missing or unknown value is replaced by ``fallback_mood``
    instead of failing the request.

    Args:
        raw_text: Free-form text returned by the model.
        fields: String fields to read from the JSON object.
        allowed_moods: Closed mood enum the ``mood`` field must belong to.
        fallback_mood: Member used when ``mood`` is outside ``allowed_moods``.

    Returns:
        A new dict; nothing from a previous call is reused.
    """
    data = extract_json(raw_text)
    record: dict[str, Any] = {name: _as_text(data.get(name)) for name in fields}

    if allowed_moods is not None:
        if fallback_mood is None:
            raise ValueError("fallback_mood is required when allowed_moods is set")
        raw_mood = data.get("mood")
        try:
            record["mood"] = allowed_moods(raw_mood)
        except ValueError:
            logger.warning(
                "Mood %r outside %s, using %s",
                raw_mood,
                allowed_moods.__name__,
                fallback_mood.value,
            )
            record["mood"] = fallback_mood
    return record
