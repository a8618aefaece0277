"""
LLM Review Engine

This module provides prompt construction, provider request rendering,
HTTP transport and response interpretation for AI code reviews.
"""

from .prompts import PromptBuilder
from .adapter import RequestAdapter, RequestMode, RenderedRequest
from .interpreter import ResponseInterpreter, extract_rating, clamp_rating
from .transport import HttpTransport, Transport

__all__ = [
    'PromptBuilder',
    'RequestAdapter',
    'RequestMode',
    'RenderedRequest',
    'ResponseInterpreter',
    'extract_rating',
    'clamp_rating',
    'HttpTransport',
    'Transport',
]
