"""Groq chat-completion client for advisory narratives."""

from __future__ import annotations

from typing import Any

from advisor_server.providers.http import ProviderError, post_json

ADVISOR_SYSTEM_PROMPT = (
    "You are FinAdvisor AI, a professional investment advisor specializing in Kenyan markets. "
    "Provide clear, data-driven investment advice. Always include the disclaimer: "
    '"I am not a licensed financial advisor. This is educational information only."'
)


class GroqClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout_seconds: float = 20.0,
        max_tokens: int = 1000,
        temperature: float = 0.7,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.max_tokens = max_tokens
        self.temperature = temperature

    def complete(self, prompt: str) -> str | None:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": ADVISOR_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        data = post_json(
            self.base_url,
            provider="groq",
            payload=payload,
            timeout_seconds=self.timeout_seconds,
            headers=headers,
        )
        if not data:
            return None
        if not isinstance(data, dict):
            raise ProviderError("groq", "BAD_RESPONSE", "Groq returned an unexpected completion shape.")
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            return None
        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        if not isinstance(message, dict):
            raise ProviderError("groq", "BAD_RESPONSE", "Groq returned an unexpected completion shape.")
        content = message.get("content")
        if not isinstance(content, str) or not content.strip():
            return None
        return content.strip()
