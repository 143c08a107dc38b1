from abc import ABC, abstractmethod
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

import httpx

from devmentor.core.errors import TransportFailure
from devmentor.core.resilience import CircuitBreaker, retry_with_backoff
from devmentor.core.settings import Settings, settings as default_settings

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


def _estimate_tokens(text: str) -> int:
    # Lightweight deterministic estimate used for observability without provider-specific token APIs.
    return max(1, len((text or "").strip()) // 4)


class BaseLLMProvider(ABC):
    provider_name: str
    model_name: str = "none"

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
        json_mode: bool = False,
    ) -> tuple[str | None, dict]:
        """Return (text, usage). Text is None when the service gave no answer.

        Raises TransportFailure when the service cannot be reached.
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        return None


class GeminiLLMProvider(BaseLLMProvider):
    provider_name = "gemini"

    def __init__(
        self,
        config: Settings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        model_name: str | None = None,
    ):
        self.config = config or default_settings
        self.model_name = model_name or self.config.llm_model
        self.breaker = CircuitBreaker(name=f"llm:{self.provider_name}:{self.model_name}")
        self._client = http_client
        self._owns_client = http_client is None

    @staticmethod
    def _sanitize_url(raw_url: str) -> str:
        parsed = urlparse(raw_url)
        if not parsed.query:
            return raw_url
        filtered = [(k, v) for k, v in parse_qsl(parsed.query, keep_blank_values=True) if k.lower() != "key"]
        return urlunparse(parsed._replace(query=urlencode(filtered)))

    def _endpoint(self) -> str:
        api_url = self.config.gemini_api_url.strip()
        if not api_url:
            api_url = f"{GEMINI_BASE_URL}/{self.model_name}:generateContent"
        return self._sanitize_url(api_url)

    def _payload(self, prompt: str, temperature: float | None, max_output_tokens: int | None, json_mode: bool) -> dict:
        generation_config = {
            "temperature": self.config.llm_temperature if temperature is None else temperature,
            "topK": self.config.llm_top_k,
            "topP": self.config.llm_top_p,
            "maxOutputTokens": max_output_tokens or self.config.llm_max_output_tokens,
        }
        if json_mode:
            generation_config["responseMimeType"] = "application/json"
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.llm_timeout_seconds)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
        json_mode: bool = False,
    ) -> tuple[str | None, dict]:
        if not self.config.gemini_api_key:
            return None, {"provider": self.provider_name, "model": self.model_name, "reason": "missing_api_key"}

        if not self.breaker.can_execute():
            return None, {"provider": self.provider_name, "model": self.model_name, "reason": "circuit_open"}

        payload = self._payload(prompt, temperature, max_output_tokens, json_mode)
        client = self._get_client()

        async def _call():
            response = await client.post(
                self._endpoint(),
                json=payload,
                headers={"x-goog-api-key": self.config.gemini_api_key},
            )
            response.raise_for_status()
            return response.json()

        try:
            data = await retry_with_backoff(_call, max_retries=self.config.llm_max_retries)
        except httpx.HTTPStatusError as exc:
            self.breaker.record_failure()
            raise TransportFailure(
                self.provider_name,
                f"http_status_{exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            self.breaker.record_failure()
            raise TransportFailure(self.provider_name, type(exc).__name__) from exc
        self.breaker.record_success()

        candidates = data.get("candidates") or [] if isinstance(data, dict) else []
        if not candidates:
            return None, {"provider": self.provider_name, "model": self.model_name, "reason": "no_candidates"}
        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()
        prompt_tokens = _estimate_tokens(prompt)
        completion_tokens = _estimate_tokens(text)
        usage = {
            "provider": self.provider_name,
            "model": self.model_name,
            "prompt_tokens_estimate": prompt_tokens,
            "completion_tokens_estimate": completion_tokens,
            "total_tokens_estimate": prompt_tokens + completion_tokens,
            "finish_reason": candidates[0].get("finishReason"),
        }
        return (text or None), usage


class NullLLMProvider(BaseLLMProvider):
    provider_name = "none"

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
        json_mode: bool = False,
    ) -> tuple[str | None, dict]:
        return None, {
            "provider": self.provider_name,
            "model": "none",
            "prompt_tokens_estimate": _estimate_tokens(prompt),
            "completion_tokens_estimate": 0,
            "total_tokens_estimate": _estimate_tokens(prompt),
            "reason": "unsupported_provider",
        }


def build_llm_provider(
    config: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> BaseLLMProvider:
    config = config or default_settings
    provider = (config.llm_provider or "").lower()
    if provider == "gemini":
        return GeminiLLMProvider(config, http_client=http_client)
    return NullLLMProvider()
