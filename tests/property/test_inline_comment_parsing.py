"""
Property-based tests for inline comment recovery.
"""

import json

from hypothesis import assume, given, strategies as st

from review_service.exceptions import InlineCommentParseFailure
from review_service.llm.interpreter import ResponseInterpreter
from review_service.llm.prompts import INLINE_COMMENTS_MARKER
from review_service.models.review import InlineComment


inline_comments = st.lists(
    st.builds(
        InlineComment,
        path=st.text(min_size=1, max_size=40),
        line_number=st.integers(min_value=-10, max_value=100000),
        comment=st.text(max_size=120),
    ),
    max_size=10,
)


def _reply_text(narrative, comments):
    payload = json.dumps([c.to_dict() for c in comments], indent=2)
    return f"{narrative}\n\n{INLINE_COMMENTS_MARKER}\n```json\n{payload}\n```"


class TestInlineCommentProperties:
    """Property tests for inline comment parsing."""

    @given(comments=inline_comments)
    def test_reparse_is_idempotent(self, comments):
        """
        Property: Parsing, re-serializing and re-parsing yields the same list.

        Given: A reply carrying a fenced inline comment array
        When: The comments are parsed, serialized back and parsed again
        Then: Both parses produce identical lists
        """
        assume(all(
            INLINE_COMMENTS_MARKER not in c.path and INLINE_COMMENTS_MARKER not in c.comment
            for c in comments
        ))
        interpreter = ResponseInterpreter()

        first = interpreter.parse_text(_reply_text("Narrative", comments)).inline_comments
        second = interpreter.parse_text(_reply_text("Narrative", first)).inline_comments

        assert first == comments
        assert second == first

    @given(narrative=st.text(max_size=200), garbage=st.text(max_size=200))
    def test_invalid_block_keeps_narrative(self, narrative, garbage):
        """
        Property: A broken inline block never costs the narrative.
        """
        assume(INLINE_COMMENTS_MARKER not in narrative)
        assume(INLINE_COMMENTS_MARKER not in garbage)
        try:
            ResponseInterpreter().parse_inline_comments(garbage)
            assume(False)
        except InlineCommentParseFailure:
            pass

        result = ResponseInterpreter().parse_text(f"{narrative}\n{INLINE_COMMENTS_MARKER}\n{garbage}")

        assert result.narrative == narrative.strip()
        assert result.inline_comments == []
        assert 0 <= result.rating <= 100
