from __future__ import annotations

from typing import Any, Optional, Protocol

from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from config.settings import Settings, get_settings
from discovery.errors import from_upstream


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str:
        ...


def _message_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type", "text") == "text":
            parts.append(part.get("text") or "")
    return "".join(parts)


class GeminiClient:
    """Single-prompt text generation backed by Gemini."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        settings = settings or get_settings()
        if not settings.google_api_key:
            raise RuntimeError(
                "GEMINI_API_KEY not set. Please configure it in environment or .env"
            )
        self.model_name = settings.gemini_model
        self._llm = ChatGoogleGenerativeAI(
            model=settings.gemini_model,
            google_api_key=settings.google_api_key,
            temperature=settings.temperature,
            top_p=settings.top_p,
        )

    def generate(self, prompt: str) -> str:
        try:
            message = self._llm.invoke([HumanMessage(content=prompt)])
        except Exception as exc:
            raise from_upstream(exc) from exc
        return _message_text(message.content)
