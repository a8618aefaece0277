"""
Shared fixtures: provider configuration, a recording transport and
provider reply builders.
"""

import json

import pytest

from review_service.config import AppConfig, ProviderConfig, ProvidersConfig
from review_service.providers.registry import ProviderRegistry


class SpyTransport:
    """Transport double that records every call and replays a canned reply."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def post(self, url, headers, body):
        self.calls.append({'url': url, 'headers': headers, 'body': body})
        if self.error is not None:
            raise self.error
        return self.reply


def chat_messages_reply(text):
    return json.dumps({
        "id": "chatcmpl-1",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": text}}],
    })


def content_parts_reply(text):
    return json.dumps({
        "candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}],
    })


@pytest.fixture
def app_config():
    return AppConfig(
        providers=ProvidersConfig(
            chatgpt=ProviderConfig(
                api_url="https://api.openai.com/v1/chat/completions",
                api_key="sk-chatgpt",
                default_model="gpt-4o",
            ),
            grok=ProviderConfig(
                api_url="https://api.x.ai/v1/chat/completions",
                api_key="xai-grok",
                default_model="grok-2-latest",
            ),
            copilot=ProviderConfig(
                api_url="https://models.inference.ai.azure.com/chat/completions",
                api_key=None,
                default_model="gpt-4o",
            ),
            gemini=ProviderConfig(
                api_url="https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent",
                api_key="gm-key",
                default_model="gemini-1.5-flash",
            ),
        )
    )


@pytest.fixture
def registry(app_config):
    return ProviderRegistry.from_config(app_config)


@pytest.fixture
def spy_transport():
    return SpyTransport


@pytest.fixture
def replies():
    return {
        'chatgpt': chat_messages_reply,
        'grok': chat_messages_reply,
        'copilot': chat_messages_reply,
        'gemini': content_parts_reply,
    }
