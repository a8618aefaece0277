"""
Comment Formatting

Renders review results into pull request comment bodies.
"""

from .comment import CommentFormatter, PullRequestComment

__all__ = ['CommentFormatter', 'PullRequestComment']
