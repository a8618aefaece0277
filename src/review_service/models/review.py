"""
Review Data Models

코드 리뷰 요청/결과 관련 데이터 모델들
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class FileData:
    """리뷰 대상 파일"""
    path: str
    content: str


@dataclass(frozen=True)
class ChatMessage:
    """채팅 기록의 한 턴"""
    role: str
    content: str


def _coerce_line_number(value: Any) -> int:
    """lineNumber 정규화 (정수, 정수값 실수, 숫자 문자열 허용)"""
    # bool은 int의 서브클래스이므로 별도 제외
    if isinstance(value, bool):
        raise ValueError(f"lineNumber must be an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and re.fullmatch(r"-?\d+", value.strip(), re.ASCII):
        return int(value.strip())
    raise ValueError(f"lineNumber must be an integer: {value!r}")


@dataclass(frozen=True)
class InlineComment:
    """파일/라인에 고정된 리뷰 코멘트"""
    path: str
    line_number: int
    comment: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InlineComment":
        """응답 JSON 항목에서 생성 ({path, lineNumber, comment})"""
        path = data["path"]
        line_number = data["lineNumber"]
        comment = data["comment"]

        if not isinstance(path, str) or not isinstance(comment, str):
            raise ValueError("path and comment must be strings")
        return cls(path=path, line_number=_coerce_line_number(line_number), comment=comment)

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "lineNumber": self.line_number, "comment": self.comment}


@dataclass
class ReviewResult:
    """리뷰 결과 (서술형 피드백, 인라인 코멘트, 평점)"""
    narrative: str
    inline_comments: List[InlineComment] = field(default_factory=list)
    rating: int = 0

    def __post_init__(self):
        """데이터 검증"""
        if self.narrative is None:
            raise ValueError("Narrative cannot be None")
        if not 0 <= self.rating <= 100:
            raise ValueError(f"Rating must be between 0 and 100: {self.rating}")

    @classmethod
    def failure(cls, message: str) -> "ReviewResult":
        """에러 메시지를 담은 결과 생성"""
        return cls(narrative=message, inline_comments=[], rating=0)

    @property
    def has_inline_comments(self) -> bool:
        return bool(self.inline_comments)

    def comments_for(self, path: str) -> List[InlineComment]:
        """특정 파일의 인라인 코멘트들 반환"""
        return [c for c in self.inline_comments if c.path == path]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "narrative": self.narrative,
            "inlineComments": [c.to_dict() for c in self.inline_comments],
            "rating": self.rating,
        }


# Pydantic models for API validation
class FileDataRequest(BaseModel):
    """API 요청용 FileData 모델"""
    path: str
    content: str

    @field_validator('path')
    @classmethod
    def validate_path(cls, v):
        if not v.strip():
            raise ValueError('File path cannot be empty')
        return v

    def to_domain(self) -> FileData:
        return FileData(path=self.path, content=self.content)


class ChatMessageRequest(BaseModel):
    """API 요청용 ChatMessage 모델"""
    role: str
    content: str

    def to_domain(self) -> ChatMessage:
        return ChatMessage(role=self.role, content=self.content)


class ReviewFilesRequest(BaseModel):
    """리뷰 요청 본문"""
    files: List[FileDataRequest]
    provider: str
    model: str = ""
    aspects: List[str]


class ChatRequest(BaseModel):
    """채팅 요청 본문"""
    provider: str
    model: str = ""
    history: List[ChatMessageRequest]
    username: Optional[str] = None


class InlineCommentResponse(BaseModel):
    """API 응답용 InlineComment 모델"""
    path: str
    line_number: int = Field(serialization_alias='lineNumber')
    comment: str

    model_config = ConfigDict(from_attributes=True)


class ReviewResultResponse(BaseModel):
    """API 응답용 ReviewResult 모델"""
    narrative: str
    inline_comments: List[InlineCommentResponse] = Field(serialization_alias='inlineComments')
    rating: int

    model_config = ConfigDict(from_attributes=True)


class ChatResponse(BaseModel):
    """채팅 응답 본문"""
    reply: str
