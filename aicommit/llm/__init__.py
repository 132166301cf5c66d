"""LLM Client Package"""

from enum import Enum

from aicommit.llm.base import (
    LLMClient, LLMError, MissingAPIKeyError, UnsupportedProviderError,
    RemoteTransportError, RemoteAPIError, AuthError, EmptyResponseError,
    ParseError, NoHeaderFoundError, CommitMessage, COMMIT_PROMPT, DEFAULT_TIMEOUT,
    build_prompt, parse_response, parse_edited_message,
)
from aicommit.llm.claude import ClaudeClient
from aicommit.llm.gemini import GeminiClient
from aicommit.llm.openai import OpenAIClient


class Provider(str, Enum):
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    OPENAI = "openai"

    @classmethod
    def from_name(cls, name: str) -> "Provider":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise UnsupportedProviderError(
                f"Unknown provider: {name}. Use 'anthropic', 'gemini', 'openai' or 'auto'."
            )

    @classmethod
    def infer(cls, model: str | None) -> "Provider":
        """Guess the provider from a model name (legacy 'auto' behaviour)."""
        model = (model or "").lower()
        if "claude" in model:
            return cls.ANTHROPIC
        if "gemini" in model:
            return cls.GEMINI
        if "gpt" in model:
            return cls.OPENAI
        return cls.GEMINI


PROVIDERS: dict[Provider, type[LLMClient]] = {
    Provider.ANTHROPIC: ClaudeClient,
    Provider.GEMINI: GeminiClient,
    Provider.OPENAI: OpenAIClient,
}


def resolve_provider(provider: str | Provider, model: str | None = None) -> Provider:
    """Map a configured provider name ('auto' included) to a Provider."""
    if isinstance(provider, Provider):
        return provider
    if not provider or provider.strip().lower() == "auto":
        return Provider.infer(model)
    return Provider.from_name(provider)


def get_client(provider: str | Provider, model: str | None, api_key: str | None,
               timeout: float = DEFAULT_TIMEOUT, debug_dir: str | None = None) -> LLMClient:
    """Build the client registered for `provider`."""
    client_class = PROVIDERS[resolve_provider(provider, model)]
    return client_class(api_key, model, timeout=timeout, debug_dir=debug_dir)


__all__ = [
    "LLMClient",
    "LLMError",
    "MissingAPIKeyError",
    "UnsupportedProviderError",
    "RemoteTransportError",
    "RemoteAPIError",
    "AuthError",
    "EmptyResponseError",
    "ParseError",
    "NoHeaderFoundError",
    "CommitMessage",
    "COMMIT_PROMPT",
    "build_prompt",
    "parse_response",
    "parse_edited_message",
    "ClaudeClient",
    "GeminiClient",
    "OpenAIClient",
    "Provider",
    "PROVIDERS",
    "resolve_provider",
    "get_client",
]
