"""Shared LLM helpers for the agent pipeline (OpenAI text model, code-fence stripping)."""

import re
import time
from typing import Optional, Protocol

from openai import OpenAI, OpenAIError

from wizard_search.config import Settings
from wizard_search.errors import ConfigurationError, ModelError
from wizard_search.logger import log_llm_call

_FENCE_RE = re.compile(r"^```[\w+-]*[ \t]*\n?(.*?)\n?[ \t]*```$", re.DOTALL)


class TextModel(Protocol):
    """Anything that turns a prompt into text."""

    def generate(self, prompt: str, *, caller: str = "agent") -> str: ...


class OpenAITextModel:
    """Single-prompt text generation over the OpenAI chat completions API."""

    def __init__(self, client: OpenAI, model: str, temperature: float = 0.3):
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAITextModel":
        return cls(get_client(settings), settings.model_agent_search)

    def generate(self, prompt: str, *, caller: str = "agent") -> str:
        start = time.monotonic()
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
        except OpenAIError as e:
            log_llm_call(
                self.model,
                caller,
                duration_ms=int((time.monotonic() - start) * 1000),
                status="error",
                error=str(e),
            )
            raise ModelError(f"Model call failed: {e}") from e

        content = resp.choices[0].message.content if resp.choices else None
        log_llm_call(self.model, caller, duration_ms=int((time.monotonic() - start) * 1000))
        if not content or not content.strip():
            raise ModelError("Model returned an empty response")
        return content


def get_client(settings: Settings) -> OpenAI:
    if not settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY environment variable is required")
    kwargs = {"api_key": settings.openai_api_key, "timeout": settings.llm_timeout_seconds, "max_retries": 0}
    if settings.openai_base_url:
        kwargs["base_url"] = settings.openai_base_url
    return OpenAI(**kwargs)


def strip_code_fences(content: Optional[str]) -> str:
    """Remove a surrounding ``` / ```json fence from LLM output, if present."""
    text = (content or "").strip()
    match = _FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    if text.startswith("```"):
        # Opening fence without a closing one
        text = text.split("\n", 1)[1] if "\n" in text else ""
    return text.strip()
