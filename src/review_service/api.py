"""
Review Orchestrator

Main interface that drives one review or chat round trip: provider
resolution, prompt construction, request rendering, the provider call and
reply interpretation.
"""

import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence, Union

from .config import AppConfig, get_config
from .exceptions import EmptyInputError
from .llm.adapter import RequestAdapter, RequestMode
from .llm.interpreter import ResponseInterpreter
from .llm.prompts import PromptBuilder
from .llm.transport import HttpTransport, Transport
from .models.review import ChatMessage, FileData, ReviewResult
from .providers.registry import ProviderRegistry


logger = logging.getLogger(__name__)

FileInput = Union[FileData, Mapping[str, Any]]
MessageInput = Union[ChatMessage, Mapping[str, Any]]


class ReviewOrchestrator:
    """
    Entry point of the review pipeline.

    generate_review / generate_chat_reply raise typed ReviewServiceError
    subclasses. review_files / chat wrap them and never raise: failures
    come back as "Error during <provider> <operation>: <cause>" text so
    callers that persist or post the outcome always get something usable.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        registry: Optional[ProviderRegistry] = None,
        transport: Optional[Transport] = None,
    ):
        """
        Initialize review orchestrator.

        Args:
            config: Optional configuration object
            registry: Provider registry; built from config when omitted
            transport: HTTP transport; requests-based when omitted
        """
        self.config = config or get_config()

        logger.info("Initializing review orchestrator components...")

        self.registry = registry or ProviderRegistry.from_config(self.config)
        self.transport = transport or HttpTransport(
            timeout_seconds=self.config.http.timeout_seconds,
            user_agent=self.config.http.user_agent,
        )
        self.prompt_builder = PromptBuilder()
        self.request_adapter = RequestAdapter(generation=self.config.generation)
        self.response_interpreter = ResponseInterpreter()

    def generate_review(
        self,
        files: Sequence[FileInput],
        provider_name: str,
        model: Optional[str],
        aspects: Sequence[str],
    ) -> ReviewResult:
        """
        Review files with the given provider.

        Args:
            files: Files as FileData or {path, content} mappings
            provider_name: Provider name (case-insensitive)
            model: Model identifier; provider default when empty
            aspects: Ordered review aspects

        Returns:
            ReviewResult parsed from the provider reply

        Raises:
            EmptyInputError: No files or no aspects
            UnknownProviderError: Provider name not supported
            ProviderConfigurationError: Provider not configured
            TransportError: Network, timeout or HTTP status failure
            MalformedReplyError: Reply envelope not as expected
        """
        if not files:
            raise EmptyInputError("No files provided for review")
        if not aspects:
            raise EmptyInputError("No aspects provided for review")

        provider = self.registry.resolve(provider_name)
        prompt = self.prompt_builder.build_review_prompt(aspects)
        request = self.request_adapter.render(
            provider, prompt, self._to_files(files), model, RequestMode.REVIEW
        )

        start_time = datetime.now()
        logger.info(f"Requesting {provider.name.value} review of {len(files)} files")

        raw_reply = self.transport.post(request.url, request.headers, request.body)
        result = self.response_interpreter.parse(raw_reply, provider.dialect)

        processing_time = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"{provider.name.value} review completed ({processing_time:.2f}s): "
            f"rating {result.rating}, {len(result.inline_comments)} inline comments"
        )
        return result

    def generate_chat_reply(
        self,
        provider_name: str,
        model: Optional[str],
        history: Sequence[MessageInput],
        username: Optional[str] = None,
    ) -> str:
        """
        Continue a chat conversation.

        Args:
            provider_name: Provider name (case-insensitive)
            model: Model identifier; provider default when empty
            history: Chat turns as ChatMessage or {role, content} mappings
            username: Identity of the user the assistant talks to

        Returns:
            Reply text

        Raises:
            EmptyInputError: No chat history
            UnknownProviderError: Provider name not supported
            ProviderConfigurationError: Provider not configured
            TransportError: Network, timeout or HTTP status failure
            MalformedReplyError: Reply envelope not as expected
        """
        if not history:
            raise EmptyInputError("No chat history provided")

        provider = self.registry.resolve(provider_name)
        prompt = self.prompt_builder.build_chat_prompt(provider_name, username)
        request = self.request_adapter.render(
            provider, prompt, self._to_messages(history), model, RequestMode.CHAT
        )

        logger.info(f"Requesting {provider.name.value} chat reply ({len(history)} turns)")

        raw_reply = self.transport.post(request.url, request.headers, request.body)
        return self.response_interpreter.unwrap(raw_reply, provider.dialect)

    def review_files(
        self,
        files: Sequence[FileInput],
        provider_name: str,
        model: Optional[str],
        aspects: Sequence[str],
    ) -> ReviewResult:
        """Review files; failures are returned as an error narrative instead of raised."""
        try:
            return self.generate_review(files, provider_name, model, aspects)
        except Exception as e:
            logger.error(f"Error during {provider_name} review: {e}", exc_info=True)
            return ReviewResult.failure(f"Error during {provider_name} review: {e}")

    def chat(
        self,
        provider_name: str,
        model: Optional[str],
        history: Sequence[MessageInput],
        username: Optional[str] = None,
    ) -> str:
        """Chat with a provider; failures are returned as error text instead of raised."""
        try:
            return self.generate_chat_reply(provider_name, model, history, username)
        except Exception as e:
            logger.error(f"Error during {provider_name} chat: {e}", exc_info=True)
            return f"Error during {provider_name} chat: {e}"

    @staticmethod
    def _to_files(files: Sequence[FileInput]) -> List[FileData]:
        return [
            f if isinstance(f, FileData) else FileData(path=f.get('path'), content=f.get('content'))
            for f in files
        ]

    @staticmethod
    def _to_messages(history: Sequence[MessageInput]) -> List[ChatMessage]:
        return [
            m if isinstance(m, ChatMessage) else ChatMessage(role=m.get('role'), content=m.get('content'))
            for m in history
        ]
