"""
Response Interpreter

Recovers structured review data from a provider's free-form answer:
narrative feedback, an optional JSON block of inline comments and a
0-100 rating pulled out of the text heuristically.
"""

import json
import logging
import re
from typing import Any, List, Optional

from ..exceptions import InlineCommentParseFailure, MalformedReplyError
from ..models.provider import Dialect
from ..models.review import InlineComment, ReviewResult
from .prompts import INLINE_COMMENTS_MARKER


logger = logging.getLogger(__name__)

# 1-3 digit number standing on its own
_BOUNDED_NUMBER = re.compile(r'\b(\d{1,3})\b', re.ASCII)
_NON_DIGITS = re.compile(r'[^0-9]')
_LINE_BREAK = re.compile(r'\r?\n')
_INT32_MAX = 2 ** 31 - 1


def clamp_rating(value: int) -> int:
    """Clamp a rating into [0, 100]."""
    if value <= 0:
        return 0
    return min(100, value)


def _parse_digits(digits: str) -> Optional[int]:
    # Empty or out of 32-bit range counts as unparsable
    if not digits or len(digits.lstrip('0')) > 10:
        return None
    value = int(digits)
    if value > _INT32_MAX:
        return None
    return value


def extract_rating(text: str) -> int:
    """
    Extract the overall rating from review text.

    Lines are scanned top to bottom. For a line containing "rate"
    (case-insensitive), the following line is stripped to its digits and
    used if that parses; otherwise the first bounded 1-3 digit number on
    the "rate" line itself is used. When neither yields a value scanning
    continues. If nothing matches, the last bounded 1-3 digit number in
    the whole text is used, or 0 when there is none.

    Args:
        text: Full unwrapped model answer

    Returns:
        Rating clamped to [0, 100]
    """
    if not text:
        return 0

    lines = _LINE_BREAK.split(text)

    for i, line in enumerate(lines):
        if 'rate' not in line.lower():
            continue

        if i + 1 < len(lines):
            value = _parse_digits(_NON_DIGITS.sub('', lines[i + 1].strip()))
            if value is not None:
                return clamp_rating(value)

        match = _BOUNDED_NUMBER.search(line)
        if match:
            return clamp_rating(int(match.group(1)))

    last = 0
    for match in _BOUNDED_NUMBER.finditer(text):
        last = int(match.group(1))
    return clamp_rating(last)


class ResponseInterpreter:
    """
    Parses raw provider replies into ReviewResult objects.

    Envelope problems raise MalformedReplyError. A broken inline comment
    block only costs the inline comments: it is logged and replaced by an
    empty list.
    """

    def unwrap(self, raw_reply: Optional[str], dialect: Dialect) -> str:
        """
        Extract the answer text from a provider reply envelope.

        Args:
            raw_reply: Raw HTTP response body
            dialect: Wire dialect of the provider that produced it

        Returns:
            Answer text

        Raises:
            MalformedReplyError: If the envelope is not the expected shape
        """
        if not raw_reply:
            raise MalformedReplyError("Empty response from provider", raw_reply)

        try:
            data = json.loads(raw_reply)
        except ValueError as e:
            raise MalformedReplyError(f"Reply is not valid JSON: {e}", raw_reply) from e

        if not isinstance(data, dict):
            raise MalformedReplyError("Reply is not a JSON object", raw_reply)

        if dialect == Dialect.CONTENT_PARTS:
            candidate = self._first(data.get('candidates'), 'candidates', raw_reply)
            content = candidate.get('content') if isinstance(candidate, dict) else None
            part = self._first(
                content.get('parts') if isinstance(content, dict) else None, 'parts', raw_reply
            )
            text = part.get('text') if isinstance(part, dict) else None
        else:
            choice = self._first(data.get('choices'), 'choices', raw_reply)
            message = choice.get('message') if isinstance(choice, dict) else None
            text = message.get('content') if isinstance(message, dict) else None

        if not isinstance(text, str):
            raise MalformedReplyError("Reply contains no answer text", raw_reply)
        return text

    def parse(self, raw_reply: Optional[str], dialect: Dialect) -> ReviewResult:
        """
        Parse a review reply.

        Args:
            raw_reply: Raw HTTP response body
            dialect: Wire dialect of the provider that produced it

        Returns:
            ReviewResult with narrative, inline comments and rating

        Raises:
            MalformedReplyError: If the envelope is not the expected shape
        """
        return self.parse_text(self.unwrap(raw_reply, dialect))

    def parse_text(self, text: str) -> ReviewResult:
        """Split answer text into narrative, inline comments and rating."""
        sections = text.split(INLINE_COMMENTS_MARKER)
        narrative = sections[0].strip()

        inline_comments: List[InlineComment] = []
        if len(sections) > 1:
            try:
                inline_comments = self.parse_inline_comments(sections[1])
            except InlineCommentParseFailure as e:
                logger.warning(f"Discarding inline comments: {e}")

        rating = extract_rating(text)
        logger.debug(f"Parsed review: {len(inline_comments)} inline comments, rating {rating}")

        return ReviewResult(narrative=narrative, inline_comments=inline_comments, rating=rating)

    def parse_inline_comments(self, section: str) -> List[InlineComment]:
        """
        Decode the inline comment block that follows the marker.

        Args:
            section: Text after "### Inline Comments", optionally fenced

        Returns:
            List of InlineComment objects

        Raises:
            InlineCommentParseFailure: If the block is not a valid comment array
        """
        cleaned = re.sub(r'^```(?:json)?\s*', '', section.strip())
        cleaned = re.sub(r'\s*```$', '', cleaned.strip())

        try:
            items = json.loads(cleaned)
        except ValueError as e:
            raise InlineCommentParseFailure(f"Invalid JSON: {e}: {cleaned[:200]}") from e

        if not isinstance(items, list):
            raise InlineCommentParseFailure(f"Expected a JSON array, got {type(items).__name__}")

        comments = []
        for item in items:
            if not isinstance(item, dict):
                raise InlineCommentParseFailure(f"Expected a JSON object, got {item!r}")
            try:
                comments.append(InlineComment.from_dict(item))
            except (KeyError, ValueError) as e:
                raise InlineCommentParseFailure(f"Invalid inline comment {item!r}: {e}") from e

        return comments

    @staticmethod
    def _first(items: Any, key: str, raw_reply: str) -> Any:
        if not isinstance(items, list) or not items:
            raise MalformedReplyError(f"Reply has no {key}", raw_reply)
        return items[0]
