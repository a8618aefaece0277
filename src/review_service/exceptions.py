"""
Review Service Errors

리뷰 생성 파이프라인의 에러 타입들
"""

from typing import Optional


class ReviewServiceError(Exception):
    """Base class for review pipeline errors"""


class UnknownProviderError(ReviewServiceError):
    """Provider name outside the supported set"""
    def __init__(self, name: Optional[str]):
        super().__init__(f"Unknown AI: {name}")
        self.name = name


class ProviderConfigurationError(ReviewServiceError):
    """Known provider without a usable URL or credential"""


class EmptyInputError(ReviewServiceError):
    """Caller supplied no files, no chat history or no aspects"""


class MalformedReplyError(ReviewServiceError):
    """Provider reply is missing the expected envelope"""
    def __init__(self, message: str, raw_reply: Optional[str] = None):
        super().__init__(message)
        self.raw_reply = raw_reply


class InlineCommentParseFailure(ReviewServiceError):
    """Inline comment block could not be decoded"""


class TransportError(ReviewServiceError):
    """Network, timeout or HTTP status failure while calling a provider"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_text: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
