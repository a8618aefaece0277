"""
Data Models

리뷰 서비스의 핵심 데이터 모델들
"""

from .provider import Dialect, Provider, ProviderName
from .review import ChatMessage, FileData, InlineComment, ReviewResult

__all__ = [
    "Dialect",
    "Provider",
    "ProviderName",
    "ChatMessage",
    "FileData",
    "InlineComment",
    "ReviewResult",
]
