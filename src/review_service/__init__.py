"""
AI Review Service

Pull request 리뷰 생성 및 AI 응답 해석 백엔드 구현체
"""

__version__ = "1.0.0"

from .api import ReviewOrchestrator
from .models.review import ReviewResult, InlineComment, FileData, ChatMessage

__all__ = ["ReviewOrchestrator", "ReviewResult", "InlineComment", "FileData", "ChatMessage"]
