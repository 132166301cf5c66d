"""OpenAI LLM Client"""

from aicommit.llm.base import LLMClient, MAX_TOKENS, EmptyResponseError
from aicommit.llm.transport import post_json

SYSTEM_PERSONA = "You are a helpful assistant that generates concise, well-structured git commit messages."


class OpenAIClient(LLMClient):
    """OpenAI chat completions client."""

    LABEL = "OpenAI"
    DEFAULT_MODEL = "gpt-5-mini"
    URL = "https://api.openai.com/v1/chat/completions"
    TEMPERATURE = 0.3
    KNOWN_MODELS = (
        "gpt-5.1",
        "gpt-5",
        "gpt-5-mini",
        "gpt-5-nano",
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-4.1-nano",
        # legacy
        "gpt-4",
        "gpt-4-turbo",
        "gpt-4-turbo-preview",
        "gpt-4-0125-preview",
        "gpt-4-1106-preview",
        "gpt-3.5-turbo",
        "gpt-3.5-turbo-0125",
        "gpt-3.5-turbo-1106",
    )

    @classmethod
    def is_known_model(cls, model: str) -> bool:
        # Prefix match so dated snapshots (gpt-4.1-2025-04-14) are accepted
        return any(model.startswith(known) for known in cls.KNOWN_MODELS)

    def build_payload(self, prompt: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PERSONA},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }

    def _send(self, payload: dict) -> str:
        result = post_json(
            self.LABEL, self.URL, payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=self.timeout,
        )
        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise EmptyResponseError("Empty response from OpenAI")
        if not content:
            raise EmptyResponseError("Empty response from OpenAI")
        return content
