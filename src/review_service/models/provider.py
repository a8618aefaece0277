"""
Provider Data Models

AI 제공자와 요청 방언(dialect) 관련 데이터 모델들
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..exceptions import UnknownProviderError


class Dialect(str, Enum):
    """요청/응답 JSON 형태"""
    CHAT_MESSAGES = "chat_messages"  # {model, messages[], max_tokens}
    CONTENT_PARTS = "content_parts"  # {contents[].parts[], generationConfig}


class ProviderName(str, Enum):
    """지원하는 AI 제공자 목록"""
    CHATGPT = "chatgpt"
    GROK = "grok"
    COPILOT = "copilot"
    GEMINI = "gemini"

    @classmethod
    def parse(cls, name: Optional[str]) -> "ProviderName":
        """대소문자 구분 없이 제공자 이름 해석"""
        if not isinstance(name, str) or not name:
            raise UnknownProviderError(name)
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise UnknownProviderError(name) from None

    @property
    def dialect(self) -> Dialect:
        """제공자별 고정 방언"""
        return _DIALECTS[self]

    @property
    def default_model(self) -> str:
        """제공자별 기본 모델"""
        return _DEFAULT_MODELS[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DIALECTS = {
    ProviderName.CHATGPT: Dialect.CHAT_MESSAGES,
    ProviderName.GROK: Dialect.CHAT_MESSAGES,
    ProviderName.COPILOT: Dialect.CHAT_MESSAGES,
    ProviderName.GEMINI: Dialect.CONTENT_PARTS,
}

_DEFAULT_MODELS = {
    ProviderName.CHATGPT: "gpt-4o",
    ProviderName.GROK: "grok-2-latest",
    ProviderName.COPILOT: "gpt-4o",
    ProviderName.GEMINI: "gemini-1.5-flash",
}

_DISPLAY_NAMES = {
    ProviderName.CHATGPT: "ChatGPT",
    ProviderName.GROK: "Grok",
    ProviderName.COPILOT: "Copilot",
    ProviderName.GEMINI: "Gemini",
}

DEFAULT_API_URLS = {
    ProviderName.CHATGPT: "https://api.openai.com/v1/chat/completions",
    ProviderName.GROK: "https://api.x.ai/v1/chat/completions",
    ProviderName.COPILOT: "https://models.inference.ai.azure.com/chat/completions",
    ProviderName.GEMINI: "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent",
}


@dataclass(frozen=True)
class Provider:
    """설정에서 로드된 AI 제공자 (불변)"""
    name: ProviderName
    api_url: str
    api_key: str
    default_model: str

    def __post_init__(self):
        """데이터 검증"""
        if not self.api_url.startswith(("http://", "https://")):
            raise ValueError(f"API URL must be absolute: {self.api_url}")
        if not self.default_model.strip():
            raise ValueError("Default model cannot be empty")

    @property
    def dialect(self) -> Dialect:
        return self.name.dialect

    def __repr__(self) -> str:
        # 보안상 API 키는 제외
        return f"Provider(name={self.name.value!r}, api_url={self.api_url!r}, default_model={self.default_model!r})"
