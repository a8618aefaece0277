"""
Pull Request Comment Formatter

Turns a ReviewResult into the summary comment and the inline comment
payloads posted back to the source-control host.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..exceptions import UnknownProviderError
from ..models.provider import ProviderName
from ..models.review import ReviewResult


logger = logging.getLogger(__name__)


@dataclass
class PullRequestComment:
    """File/line anchored comment ready for the host API."""
    path: str
    line: int
    body: str

    def __post_init__(self):
        """데이터 검증"""
        if self.line <= 0:
            raise ValueError("Line number must be positive")

        if not self.body.strip():
            raise ValueError("Comment body cannot be empty")

    def to_dict(self) -> Dict:
        return {'path': self.path, 'line': self.line, 'body': self.body}


class CommentFormatter:
    """
    Formats review results for pull request comments.
    """

    def __init__(self, max_comment_length: int = 65536):
        """
        Initialize comment formatter.

        Args:
            max_comment_length: Host limit on a single comment body
        """
        self.max_comment_length = max_comment_length

    def format_summary(self, result: ReviewResult, provider: str, model: Optional[str] = None) -> str:
        """
        Render the summary comment.

        Args:
            result: Review result to render
            provider: Provider name used for the review
            model: Model identifier used for the review

        Returns:
            Markdown comment body
        """
        sections = [result.narrative]

        if result.rating > 0:
            sections.append(f"**Overall rating:** {result.rating}/100")

        sections.append(f"_Reviewed by {self._attribution(provider, model)}_")

        body = "\n\n".join(s for s in sections if s)
        return self._truncate(body)

    def format_inline(self, result: ReviewResult) -> List[PullRequestComment]:
        """
        Convert inline comments into host payloads.

        Comments with a non-positive line number or an empty body are
        dropped.

        Args:
            result: Review result holding inline comments

        Returns:
            List of PullRequestComment objects sorted by path and line
        """
        comments = []

        for inline in result.inline_comments:
            if inline.line_number <= 0 or not inline.comment.strip():
                logger.warning(f"Skipping inline comment {inline.path}:{inline.line_number}")
                continue
            comments.append(PullRequestComment(
                path=inline.path,
                line=inline.line_number,
                body=self._truncate(inline.comment.strip()),
            ))

        comments.sort(key=lambda c: (c.path, c.line))
        logger.info(f"Formatted {len(comments)} inline comments")
        return comments

    def _attribution(self, provider: str, model: Optional[str]) -> str:
        try:
            label = ProviderName.parse(provider).display_name
        except UnknownProviderError:
            label = provider
        return f"{label} ({model})" if model else label

    def _truncate(self, body: str) -> str:
        if len(body) <= self.max_comment_length:
            return body
        suffix = "\n\n... (truncated)"
        return body[:self.max_comment_length - len(suffix)] + suffix
