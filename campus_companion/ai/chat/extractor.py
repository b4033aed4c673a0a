"""
Recover a structured answer from free-form completion text.

The model is asked to reply with a JSON object, but its output is untrusted
text. Parsing happens in two stages: the span from the first "{" to the last
"}" is decoded and validated against RawAnswer; if either step fails the
whole text becomes the message and no links are suggested.

Known fragility: the brace span is a heuristic, not a grammar. A reply that
holds two unrelated brace-delimited fragments, or unbalanced braces inside a
string value, yields a span that does not decode and drops to the fallback.
"""

import json
import re

from pydantic import ValidationError

from campus_companion.ai.chat.exceptions import ParseFailureError
from campus_companion.ai.chat.schemas import ExtractedAnswer, RawAnswer, RawSuggestion
from campus_companion.utils.logger import logger

JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def find_json_object(text: str) -> str | None:
    """Return the span from the first '{' to the last '}', if any."""
    match = JSON_OBJECT_PATTERN.search(text)
    return match.group(0) if match else None


def parse_answer(text: str) -> RawAnswer:
    """Strictly parse completion text into a RawAnswer.

    Raises:
        ParseFailureError: If there is no JSON object, it does not decode, or
            it does not have a string message and a list of suggestions
    """
    candidate = find_json_object(text)
    if candidate is None:
        raise ParseFailureError("No JSON object in completion text")

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ParseFailureError(f"Invalid JSON in completion text: {e.msg}", e) from e

    try:
        return RawAnswer.model_validate(data)
    except ValidationError as e:
        raise ParseFailureError("Completion JSON has the wrong shape", e) from e


def validate_suggestions(items: list) -> list[RawSuggestion]:
    """Validate suggestions one by one, dropping the malformed ones."""
    suggestions = []
    for item in items:
        try:
            suggestions.append(RawSuggestion.model_validate(item))
        except ValidationError:
            logger.debug("Dropping malformed suggestion", item=repr(item)[:200])
    return suggestions


def extract_answer(text: str) -> ExtractedAnswer:
    """Best-effort extraction of the model's structured answer.

    Args:
        text: Raw text of the first completion choice

    Returns:
        ExtractedAnswer: Parsed message and suggestions, or the raw text with
        no suggestions when the text is not a usable answer
    """
    try:
        raw = parse_answer(text)
    except ParseFailureError as e:
        logger.info("Using raw completion text as answer", reason=e.message)
        return ExtractedAnswer(message=text, suggestions=[], structured=False)

    suggestions = validate_suggestions(raw.suggested_links)
    if len(suggestions) != len(raw.suggested_links):
        logger.info(
            "Dropped malformed suggestions",
            received=len(raw.suggested_links),
            kept=len(suggestions),
        )
    return ExtractedAnswer(message=raw.message, suggestions=suggestions, structured=True)
