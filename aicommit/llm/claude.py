"""Claude (Anthropic) LLM Client"""

from aicommit.llm.base import (
    LLMClient, LLMError, MAX_TOKENS, EmptyResponseError, RemoteTransportError, error_from_response,
)


class ClaudeClient(LLMClient):
    """Claude API client, via the Anthropic SDK."""

    LABEL = "Anthropic"
    DEFAULT_MODEL = "claude-haiku-4-5-20251001"
    API_VERSION = "2023-06-01"
    KNOWN_MODELS = (
        # Claude 4.5
        "claude-opus-4-5-20251101",
        "claude-sonnet-4-5-20250929",
        "claude-haiku-4-5-20251001",
        # Claude 4.1 / 4
        "claude-opus-4-1-20250805",
        "claude-sonnet-4-20250522",
        # Claude 3 (deprecated)
        "claude-3-opus-20240229",
        "claude-3-sonnet-20240229",
        "claude-3-5-sonnet-20240620",
        "claude-3-haiku-20240307",
        "claude-3-5-haiku-20241022",
    )

    def __init__(self, api_key: str | None, model: str | None = None, **kwargs):
        super().__init__(api_key, model, **kwargs)

        try:
            from anthropic import Anthropic
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic"
            )
        # One attempt per run; the SDK would otherwise retry on its own
        self._client = Anthropic(
            api_key=self.api_key,
            max_retries=0,
            timeout=self.timeout,
            default_headers={"anthropic-version": self.API_VERSION},
        )

    def build_payload(self, prompt: str) -> dict:
        return {
            "model": self.model,
            "max_tokens": MAX_TOKENS,
            "messages": [
                {"role": "user", "content": [{"type": "text", "text": prompt}]},
            ],
        }

    def _send(self, payload: dict) -> str:
        from anthropic import APIConnectionError, APIStatusError

        try:
            response = self._client.messages.create(**payload)
        except APIStatusError as e:
            body = e.body if e.body is not None else e.response.text
            raise error_from_response(self.LABEL, e.status_code, body)
        except APIConnectionError as e:
            raise RemoteTransportError(f"{self.LABEL} request failed: {e}")

        for block in response.content or []:
            if block.type == "text" and block.text:
                return block.text
        raise EmptyResponseError("Empty response from Anthropic")
