"""
Request Adapter

Renders a prompt plus files or chat turns into the wire format a provider
expects. Two dialects are supported:

- chat messages: {model, messages[], max_tokens} with bearer auth
- content parts: {contents[].parts[], generationConfig} with the key in
  the query string
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union
from urllib.parse import quote

from ..config import GenerationConfig
from ..exceptions import EmptyInputError
from ..models.provider import Dialect, Provider
from ..models.review import ChatMessage, FileData


logger = logging.getLogger(__name__)

Payload = Sequence[Union[FileData, ChatMessage]]


class RequestMode(str, Enum):
    """Review or chat request"""
    REVIEW = "review"
    CHAT = "chat"


@dataclass(frozen=True)
class RenderedRequest:
    """Fully rendered provider request."""
    url: str
    headers: Dict[str, str]
    body: Dict[str, Any]


class RequestAdapter:
    """
    Builds provider requests for both wire dialects.

    Rendering is side-effect free: every call returns a new
    RenderedRequest and never touches the network.
    """

    def __init__(self, generation: Optional[GenerationConfig] = None):
        """
        Initialize request adapter.

        Args:
            generation: Temperature and token limits per request mode
        """
        self.generation = generation or GenerationConfig()

        # Code fence language tags by file extension
        self.fence_languages = {
            'py': 'python',
            'js': 'javascript',
            'jsx': 'jsx',
            'ts': 'typescript',
            'tsx': 'tsx',
            'java': 'java',
            'kt': 'kotlin',
            'go': 'go',
            'rs': 'rust',
            'rb': 'ruby',
            'php': 'php',
            'cs': 'csharp',
            'cpp': 'cpp',
            'c': 'c',
            'h': 'c',
            'swift': 'swift',
            'scala': 'scala',
            'sql': 'sql',
            'sh': 'bash',
            'yml': 'yaml',
            'yaml': 'yaml',
            'json': 'json',
            'xml': 'xml',
            'html': 'html',
            'css': 'css',
            'scss': 'scss',
            'vue': 'vue',
        }

    def render(
        self,
        provider: Provider,
        prompt: str,
        payload: Payload,
        model: Optional[str] = None,
        mode: RequestMode = RequestMode.REVIEW,
    ) -> RenderedRequest:
        """
        Render a provider request.

        Args:
            provider: Resolved provider
            prompt: System prompt text
            payload: Files to review or chat turns to replay
            model: Model identifier; provider default when empty
            mode: Review or chat, selects generation limits

        Returns:
            RenderedRequest with url, headers and JSON body

        Raises:
            EmptyInputError: If payload is empty or has no valid entries
        """
        if not payload:
            raise EmptyInputError(self._empty_message(mode))

        entries = self._payload_entries(payload)
        if not entries:
            raise EmptyInputError(self._empty_message(mode))

        if provider.dialect == Dialect.CONTENT_PARTS:
            return self._render_content_parts(provider, prompt, entries, mode)
        return self._render_chat_messages(provider, prompt, entries, model, mode)

    def _render_chat_messages(
        self,
        provider: Provider,
        prompt: str,
        entries: List[Dict[str, str]],
        model: Optional[str],
        mode: RequestMode,
    ) -> RenderedRequest:
        messages = [{"role": "system", "content": prompt}]
        messages.extend({"role": e["role"], "content": e["text"]} for e in entries)

        body = {
            "model": model or provider.default_model,
            "messages": messages,
            "max_tokens": self._max_tokens(mode),
        }
        headers = {
            "Authorization": f"Bearer {provider.api_key}",
            "Content-Type": "application/json",
        }

        logger.debug(f"Rendered {provider.name.value} request with {len(messages)} messages")
        return RenderedRequest(url=provider.api_url, headers=headers, body=body)

    def _render_content_parts(
        self,
        provider: Provider,
        prompt: str,
        entries: List[Dict[str, str]],
        mode: RequestMode,
    ) -> RenderedRequest:
        contents = [{"role": "user", "parts": [{"text": prompt}]}]
        contents.extend({"role": e["role"], "parts": [{"text": e["text"]}]} for e in entries)

        body = {
            "contents": contents,
            "generationConfig": {
                "temperature": self._temperature(mode),
                "maxOutputTokens": self._max_tokens(mode),
            },
        }
        headers = {"Content-Type": "application/json"}

        separator = '&' if '?' in provider.api_url else '?'
        url = f"{provider.api_url}{separator}key={quote(provider.api_key, safe='')}"

        logger.debug(f"Rendered {provider.name.value} request with {len(contents)} contents")
        return RenderedRequest(url=url, headers=headers, body=body)

    def _payload_entries(self, payload: Payload) -> List[Dict[str, str]]:
        """Convert files or chat turns into (role, text) entries, skipping invalid ones."""
        entries = []

        for item in payload:
            if isinstance(item, FileData):
                if item.path is None or item.content is None:
                    logger.warning(f"Invalid file data: {item}")
                    continue
                entries.append({"role": "user", "text": self.format_file(item)})
            elif isinstance(item, ChatMessage):
                if item.role is None or item.content is None:
                    logger.warning(f"Invalid message data: {item}")
                    continue
                entries.append({"role": item.role, "text": item.content})
            else:
                logger.warning(f"Unsupported payload entry: {type(item).__name__}")

        return entries

    def format_file(self, file: FileData) -> str:
        """Render one file as a labelled code block."""
        language = self._fence_language(file.path)
        return f"File: {file.path}\n```{language}\n{file.content}\n```"

    def _fence_language(self, path: str) -> str:
        match = re.search(r'\.([A-Za-z0-9]+)$', path)
        if not match:
            return ''
        return self.fence_languages.get(match.group(1).lower(), '')

    def _max_tokens(self, mode: RequestMode) -> int:
        if mode == RequestMode.CHAT:
            return self.generation.chat_max_tokens
        return self.generation.review_max_tokens

    def _temperature(self, mode: RequestMode) -> float:
        if mode == RequestMode.CHAT:
            return self.generation.chat_temperature
        return self.generation.review_temperature

    @staticmethod
    def _empty_message(mode: RequestMode) -> str:
        if mode == RequestMode.CHAT:
            return "No chat history provided"
        return "No files provided for review"
