"""
Configuration Management

시스템 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from pathlib import Path
import logging

from .models.provider import ProviderName, DEFAULT_API_URLS


@dataclass
class ProviderConfig:
    """AI 제공자 연결 설정"""
    api_url: str = ""
    api_key: Optional[str] = None
    default_model: str = ""


def _default_provider(name: ProviderName) -> ProviderConfig:
    return ProviderConfig(api_url=DEFAULT_API_URLS[name], default_model=name.default_model)


@dataclass
class ProvidersConfig:
    """전체 AI 제공자 설정"""
    chatgpt: ProviderConfig = field(default_factory=lambda: _default_provider(ProviderName.CHATGPT))
    grok: ProviderConfig = field(default_factory=lambda: _default_provider(ProviderName.GROK))
    copilot: ProviderConfig = field(default_factory=lambda: _default_provider(ProviderName.COPILOT))
    gemini: ProviderConfig = field(default_factory=lambda: _default_provider(ProviderName.GEMINI))

    def get(self, name: ProviderName) -> ProviderConfig:
        """제공자 이름으로 설정 조회"""
        return getattr(self, name.value)

    @classmethod
    def from_env(cls) -> "ProvidersConfig":
        """환경 변수에서 설정 로드 (예: CHATGPT_API_URL, CHATGPT_API_KEY, CHATGPT_MODEL)"""
        configs = {}
        for name in ProviderName:
            prefix = name.value.upper()
            configs[name.value] = ProviderConfig(
                api_url=os.getenv(f"{prefix}_API_URL", DEFAULT_API_URLS[name]),
                api_key=os.getenv(f"{prefix}_API_KEY"),
                default_model=os.getenv(f"{prefix}_MODEL", name.default_model),
            )
        return cls(**configs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProvidersConfig":
        """YAML 섹션에서 설정 로드 (누락된 항목은 기본값 사용)"""
        configs = {}
        for name in ProviderName:
            values = data.get(name.value) or {}
            base = _default_provider(name)
            configs[name.value] = ProviderConfig(
                api_url=values.get('api_url', base.api_url),
                api_key=values.get('api_key'),
                default_model=values.get('default_model', base.default_model),
            )
        return cls(**configs)


@dataclass
class GenerationConfig:
    """생성 파라미터 설정"""
    review_temperature: float = 0.7
    review_max_tokens: int = 4096
    chat_temperature: float = 0.9
    chat_max_tokens: int = 2048


@dataclass
class HttpConfig:
    """HTTP 전송 설정"""
    timeout_seconds: float = 60.0
    user_agent: str = "AI-Review-Service/1.0"


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        return cls(
            providers=ProvidersConfig.from_env(),
            generation=GenerationConfig(
                review_temperature=float(os.getenv("REVIEW_TEMPERATURE", "0.7")),
                review_max_tokens=int(os.getenv("REVIEW_MAX_TOKENS", "4096")),
                chat_temperature=float(os.getenv("CHAT_TEMPERATURE", "0.9")),
                chat_max_tokens=int(os.getenv("CHAT_MAX_TOKENS", "2048")),
            ),
            http=HttpConfig(
                timeout_seconds=float(os.getenv("AI_TIMEOUT_SECONDS", "60")),
                user_agent=os.getenv("AI_USER_AGENT", "AI-Review-Service/1.0"),
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("LOG_FILE"),
                max_file_size=int(os.getenv("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            ),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(
            providers=ProvidersConfig.from_dict(config_data.get('providers', {})),
            generation=GenerationConfig(**config_data.get('generation', {})),
            http=HttpConfig(**config_data.get('http', {})),
            logging=LoggingConfig(**config_data.get('logging', {})),
            debug=config_data.get('debug', False),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        # 제공자 URL 확인
        for name in ProviderName:
            provider = self.providers.get(name)
            if provider.api_url and not provider.api_url.startswith(("http://", "https://")):
                errors.append(f"{name.value} API URL is not absolute: {provider.api_url}")

        # 생성 파라미터 검증
        for label, tokens in (("review", self.generation.review_max_tokens),
                              ("chat", self.generation.chat_max_tokens)):
            if tokens <= 0:
                errors.append(f"{label} max tokens must be positive")

        for label, temperature in (("review", self.generation.review_temperature),
                                   ("chat", self.generation.chat_temperature)):
            if not 0.0 <= temperature <= 2.0:
                errors.append(f"{label} temperature must be between 0.0 and 2.0")

        # 타임아웃 검증
        if self.http.timeout_seconds <= 0:
            errors.append("HTTP timeout must be positive")

        # 로그 레벨 검증
        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'providers': {
                name.value: {
                    'api_url': self.providers.get(name).api_url,
                    'default_model': self.providers.get(name).default_model,
                    'configured': bool(self.providers.get(name).api_key),
                    # 보안상 API 키는 제외
                }
                for name in ProviderName
            },
            'generation': {
                'review_temperature': self.generation.review_temperature,
                'review_max_tokens': self.generation.review_max_tokens,
                'chat_temperature': self.generation.chat_temperature,
                'chat_max_tokens': self.generation.chat_max_tokens,
            },
            'http': {
                'timeout_seconds': self.http.timeout_seconds,
                'user_agent': self.http.user_agent,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'debug': self.debug,
        }


class ConfigManager:
    """설정 관리자"""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """현재 설정 반환"""
        return self._config

    def _setup_logging(self) -> None:
        """로깅 설정"""
        logging.basicConfig(
            level=getattr(logging, self._config.logging.level.upper()),
            format=self._config.logging.format,
        )

        # 파일 로깅이 설정된 경우 로테이션 설정
        if self._config.logging.file_path:
            from logging.handlers import RotatingFileHandler

            handler = RotatingFileHandler(
                self._config.logging.file_path,
                maxBytes=self._config.logging.max_file_size,
                backupCount=self._config.logging.backup_count,
            )
            handler.setFormatter(logging.Formatter(self._config.logging.format))

            # 루트 로거에 핸들러 추가
            root_logger = logging.getLogger()
            root_logger.addHandler(handler)


_config_manager: Optional[ConfigManager] = None


def get_config() -> AppConfig:
    """현재 설정 반환 (최초 호출 시 환경 변수에서 로드)"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager.config
