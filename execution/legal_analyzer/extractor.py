"""
Response Extractor

Recovers the JSON object embedded in the model's free-form reply. The model
is told to answer with pure JSON, but replies often arrive wrapped in prose or
markdown code fences.

Known limitation: the match is greedy, from the first '{' to the last '}'.
A reply containing two sibling objects, or a stray '}' after the real object,
produces a span that fails to parse and is reported as malformed rather than
guessed at.
"""

import json
import logging

from .errors import MalformedUpstreamResponse

logger = logging.getLogger(__name__)

LOG_PREVIEW_CHARS = 500


def extract_analysis(raw_text: str) -> dict:
    """
    Parse the outermost brace-delimited span of a model reply.

    Args:
        raw_text: The model's text output, unmodified

    Returns:
        The parsed object, verbatim (no key checks or defaults)

    Raises:
        MalformedUpstreamResponse: no brace span (details = raw_text), or the
            span is not valid JSON (details = the attempted span)
    """
    start = raw_text.find("{")
    end = raw_text.rfind("}")

    if start == -1 or end < start:
        logger.warning(f"No JSON object in model reply: {raw_text[:LOG_PREVIEW_CHARS]!r}")
        raise MalformedUpstreamResponse(details=raw_text)

    candidate = raw_text[start:end + 1]
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning(f"Model reply span is not valid JSON ({e}): {candidate[:LOG_PREVIEW_CHARS]!r}")
        raise MalformedUpstreamResponse(details=candidate)
