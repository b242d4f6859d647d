"""Best-effort extraction of a JSON object embedded in model output.

Models often wrap the requested JSON in prose or markdown code fences. The
extractor takes the span from the first ``{`` to the last ``}``; if that span
does not parse (stray braces after the object), it decodes a single value
starting at the first ``{`` and ignores whatever follows. It never raises:
an unusable response is reported as ``ExtractedJson(ok=False)``.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from .types import UNPARSEABLE, ExtractedJson

logger = logging.getLogger(__name__)

_BRACE_SPAN = re.compile(r"\{[\s\S]*\}")
_decoder = json.JSONDecoder()


def extract_json(text: Any) -> ExtractedJson:
    """Return the first JSON object found in *text*, or a not-ok result."""
    if not isinstance(text, str):
        return UNPARSEABLE

    match = _BRACE_SPAN.search(text)
    if not match:
        logger.debug("No brace-delimited block in model response")
        return UNPARSEABLE

    try:
        value = json.loads(match.group(0))
    except (ValueError, RecursionError):
        try:
            value, _ = _decoder.raw_decode(text, match.start())
        except (ValueError, RecursionError) as e:
            logger.debug(f"Could not parse JSON from model response: {e}")
            return UNPARSEABLE

    if not isinstance(value, dict):
        return UNPARSEABLE
    return ExtractedJson(ok=True, value=value)
