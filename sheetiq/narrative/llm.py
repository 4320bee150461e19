"""
Remote text generation for insight descriptions.

One request per description, bounded by `timeout` seconds and never
retried: the caller always has the rule-based sentence to fall back on.
Provider SDKs are imported on first use so the engine runs without them.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sheetiq.core.errors import SheetIQError


class LLMError(SheetIQError):
    """Base class for description-generation failures."""


class LLMDisabledError(LLMError):
    pass


class LLMConfigurationError(LLMError):
    pass


class LLMRuntimeError(LLMError):
    pass


DEFAULT_SYSTEM_PROMPT = (
    "You are a data analyst who explains statistical results "
    "in clear, business-friendly terms."
)


@dataclass(frozen=True)
class ProviderSpec:
    api_key_env: str
    default_model: str
    package: str


PROVIDERS: Dict[str, ProviderSpec] = {
    "openai": ProviderSpec("OPENAI_API_KEY", "gpt-4o-mini", "openai"),
    "gemini": ProviderSpec("GEMINI_API_KEY", "gemini-1.5-flash-latest", "google-generativeai"),
}


class LLMClient:
    """
    Thin wrapper over the configured provider.

    Reads the `narrative` config section: enabled, provider, model,
    temperature, max_tokens, timeout. API keys come from the
    environment only.
    """

    def __init__(self, config: Dict[str, Any]):
        self.enabled = bool(config.get("enabled", False))
        self.provider = str(config.get("provider", "openai")).lower()

        spec = PROVIDERS.get(self.provider)
        self.model = config.get("model") or (spec.default_model if spec else None)
        self.temperature = float(config.get("temperature", 0.3))
        self.max_tokens = int(config.get("max_tokens", 150))
        self.timeout = float(config.get("timeout", 15))

        if self.enabled:
            self._check_ready()

    @property
    def spec(self) -> ProviderSpec:
        try:
            return PROVIDERS[self.provider]
        except KeyError:
            raise LLMConfigurationError(
                f"Unsupported LLM provider {self.provider!r}; "
                f"choose one of {sorted(PROVIDERS)}"
            ) from None

    def _check_ready(self) -> None:
        spec = self.spec
        if not self.model:
            raise LLMConfigurationError("LLM model must be specified")
        if not os.getenv(spec.api_key_env):
            raise LLMConfigurationError(f"{spec.api_key_env} is not set")

    def generate(self, prompt: str, system: Optional[str] = None) -> str:
        if not self.enabled:
            raise LLMDisabledError("LLM narrative is disabled")
        if not isinstance(prompt, str) or not prompt.strip():
            raise ValueError("Prompt must be a non-empty string")

        call = getattr(self, f"_call_{self.provider}")

        try:
            text = call(prompt, system or DEFAULT_SYSTEM_PROMPT)
        except LLMError:
            raise
        except Exception as e:
            raise LLMRuntimeError(f"{self.provider} request failed: {e}") from e

        if not text or not text.strip():
            raise LLMRuntimeError(f"{self.provider} returned an empty response")
        return text.strip()

    # -------------------------------------------------
    # PROVIDERS
    # -------------------------------------------------
    def _call_openai(self, prompt: str, system: str) -> Optional[str]:
        try:
            from openai import OpenAI
        except ImportError as e:
            raise LLMConfigurationError(f"{self.spec.package} is not installed") from e

        client = OpenAI(timeout=self.timeout, max_retries=0)
        response = client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return response.choices[0].message.content

    def _call_gemini(self, prompt: str, system: str) -> Optional[str]:
        try:
            import google.generativeai as genai
        except ImportError as e:
            raise LLMConfigurationError(f"{self.spec.package} is not installed") from e

        genai.configure(api_key=os.getenv(self.spec.api_key_env))
        model = genai.GenerativeModel(self.model, system_instruction=system)
        response = model.generate_content(
            prompt,
            generation_config={
                "temperature": self.temperature,
                "max_output_tokens": self.max_tokens,
            },
            request_options={"timeout": self.timeout},
        )
        return getattr(response, "text", None)
