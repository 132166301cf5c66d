"""Gemini (Google) LLM Client"""

from aicommit.llm.base import LLMClient, EmptyResponseError
from aicommit.llm.transport import post_json


class GeminiClient(LLMClient):
    """Gemini generateContent client."""

    LABEL = "Gemini"
    DEFAULT_MODEL = "gemini-2.5-flash"
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    MODEL_PREFIX = "models/"
    KNOWN_MODELS = (
        "gemini-2.5-pro",
        "gemini-2.5-flash",
        "gemini-2.5-flash-lite",
        "gemini-2.0-flash",
        # deprecated
        "gemini-1.5-pro",
        "gemini-1.5-flash",
        "gemini-pro",
        "gemini-pro-vision",
    )

    @classmethod
    def is_known_model(cls, model: str) -> bool:
        return model.removeprefix(cls.MODEL_PREFIX) in cls.KNOWN_MODELS

    @classmethod
    def resolve_model(cls, model: str | None) -> str:
        model = super().resolve_model(model)
        if not model.startswith(cls.MODEL_PREFIX):
            model = cls.MODEL_PREFIX + model
        return model

    @property
    def url(self) -> str:
        return f"{self.BASE_URL}/{self.model}:generateContent"

    def build_payload(self, prompt: str) -> dict:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    def _send(self, payload: dict) -> str:
        result = post_json(
            self.LABEL, self.url, payload,
            headers={"x-goog-api-key": self.api_key},
            timeout=self.timeout,
        )
        try:
            text = result["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise EmptyResponseError("Empty response from Gemini")
        if not text:
            raise EmptyResponseError("Empty response from Gemini")
        return text
