"""
Unit tests for provider request rendering.
"""

import pytest

from review_service.config import GenerationConfig
from review_service.exceptions import EmptyInputError
from review_service.llm.adapter import RequestAdapter, RequestMode
from review_service.models.provider import Provider, ProviderName
from review_service.models.review import ChatMessage, FileData


PROMPT = "You are an expert senior code reviewer."


class TestChatMessagesDialect:
    """Unit tests for the {model, messages, max_tokens} dialect."""

    def setup_method(self):
        """Set up test fixtures."""
        self.adapter = RequestAdapter()
        self.provider = Provider(
            name=ProviderName.CHATGPT,
            api_url="https://api.openai.com/v1/chat/completions",
            api_key="sk-chatgpt",
            default_model="gpt-4o",
        )

    def test_review_request_shape(self):
        """Test review request body, headers and URL."""
        files = [
            FileData(path="src/main/App.java", content="class App {}"),
            FileData(path="web/index.ts", content="export const x = 1;"),
        ]

        request = self.adapter.render(self.provider, PROMPT, files, "gpt-4o-mini")

        assert request.url == "https://api.openai.com/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-chatgpt"
        assert list(request.body.keys()) == ["model", "messages", "max_tokens"]
        assert request.body["model"] == "gpt-4o-mini"
        assert request.body["max_tokens"] == 4096
        assert request.body["messages"] == [
            {"role": "system", "content": PROMPT},
            {"role": "user", "content": "File: src/main/App.java\n```java\nclass App {}\n```"},
            {"role": "user", "content": "File: web/index.ts\n```typescript\nexport const x = 1;\n```"},
        ]

    def test_empty_model_uses_provider_default(self):
        """Test default model fallback."""
        request = self.adapter.render(self.provider, PROMPT, [FileData("a.py", "x = 1")], "")

        assert request.body["model"] == "gpt-4o"

    def test_chat_request_keeps_roles(self):
        """Test chat history replay."""
        history = [
            ChatMessage(role="user", content="What does this function do?"),
            ChatMessage(role="assistant", content="It parses the config."),
            ChatMessage(role="user", content="Thanks!"),
        ]

        request = self.adapter.render(self.provider, PROMPT, history, "gpt-4o", RequestMode.CHAT)

        assert request.body["max_tokens"] == 2048
        assert [m["role"] for m in request.body["messages"]] == ["system", "user", "assistant", "user"]
        assert request.body["messages"][2]["content"] == "It parses the config."

    def test_invalid_entries_skipped(self):
        """Test that files without path or content are dropped."""
        files = [FileData(path=None, content="orphan"), FileData(path="ok.go", content="package main")]

        request = self.adapter.render(self.provider, PROMPT, files, "gpt-4o")

        assert len(request.body["messages"]) == 2
        assert request.body["messages"][1]["content"].startswith("File: ok.go\n```go\n")

    def test_unknown_extension_uses_plain_fence(self):
        """Test code fence for files without a known language."""
        assert self.adapter.format_file(FileData("Makefile", "all:")) == "File: Makefile\n```\nall:\n```"

    def test_render_is_pure(self):
        """Test that rendering twice yields equal, independent requests."""
        files = [FileData("a.py", "x = 1")]

        first = self.adapter.render(self.provider, PROMPT, files, "gpt-4o")
        second = self.adapter.render(self.provider, PROMPT, files, "gpt-4o")

        assert first == second
        assert first.body is not second.body


class TestContentPartsDialect:
    """Unit tests for the {contents, generationConfig} dialect."""

    def setup_method(self):
        """Set up test fixtures."""
        self.adapter = RequestAdapter(generation=GenerationConfig())
        self.provider = Provider(
            name=ProviderName.GEMINI,
            api_url="https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent",
            api_key="gm-key",
            default_model="gemini-1.5-flash",
        )

    def test_review_request_shape(self):
        """Test review request body, headers and URL."""
        request = self.adapter.render(self.provider, PROMPT, [FileData("lib.rs", "fn main() {}")], "ignored")

        assert request.url.endswith(":generateContent?key=gm-key")
        assert "Authorization" not in request.headers
        assert list(request.body.keys()) == ["contents", "generationConfig"]
        assert request.body["contents"] == [
            {"role": "user", "parts": [{"text": PROMPT}]},
            {"role": "user", "parts": [{"text": "File: lib.rs\n```rust\nfn main() {}\n```"}]},
        ]
        assert request.body["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 4096}

    def test_chat_request_generation_config(self):
        """Test chat mode generation limits."""
        history = [ChatMessage(role="user", content="Hi")]

        request = self.adapter.render(self.provider, PROMPT, history, None, RequestMode.CHAT)

        assert request.body["generationConfig"] == {"temperature": 0.9, "maxOutputTokens": 2048}
        assert request.body["contents"][1] == {"role": "user", "parts": [{"text": "Hi"}]}

    def test_key_appended_to_existing_query(self):
        """Test key placement when the URL already has a query string."""
        provider = Provider(
            name=ProviderName.GEMINI,
            api_url="https://example.test/v1/models/x:generateContent?alt=json",
            api_key="gm-key",
            default_model="x",
        )

        request = self.adapter.render(provider, PROMPT, [FileData("a.py", "")], None)

        assert request.url == "https://example.test/v1/models/x:generateContent?alt=json&key=gm-key"


class TestEmptyInput:
    """Unit tests for empty payload rejection."""

    def setup_method(self):
        """Set up test fixtures."""
        self.adapter = RequestAdapter()
        self.provider = Provider(
            name=ProviderName.GROK,
            api_url="https://api.x.ai/v1/chat/completions",
            api_key="xai",
            default_model="grok-2-latest",
        )

    def test_empty_files_rejected(self):
        """Test that an empty file list fails."""
        with pytest.raises(EmptyInputError, match="No files provided"):
            self.adapter.render(self.provider, PROMPT, [], "grok-2-latest")

    def test_empty_history_rejected(self):
        """Test that an empty chat history fails."""
        with pytest.raises(EmptyInputError, match="No chat history"):
            self.adapter.render(self.provider, PROMPT, [], "grok-2-latest", RequestMode.CHAT)

    def test_only_invalid_entries_rejected(self):
        """Test that a payload with nothing valid left fails."""
        history = [ChatMessage(role=None, content="lost")]

        with pytest.raises(EmptyInputError):
            self.adapter.render(self.provider, PROMPT, history, "grok-2-latest", RequestMode.CHAT)
