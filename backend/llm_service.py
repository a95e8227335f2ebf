"""
OpenAI-compatible chat completion client used for Gurbani guidance.
"""

import asyncio
import os
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict

from config import _env, _env_float, _env_int


# --------------- LLM Error helpers ---------------
LLM_ERROR_PREFIX = "__LLM_ERR__"


def _llm_error(error_type: str, detail: str = "") -> str:
    """Return a sentinel string indicating an LLM call failure."""
    return f"{LLM_ERROR_PREFIX}{error_type}|{detail}"


def is_llm_error(content: str) -> bool:
    return bool(content) and content.startswith(LLM_ERROR_PREFIX)


def parse_llm_error(content: str) -> dict:
    """Parse an LLM error sentinel into {type, detail}."""
    if not is_llm_error(content):
        return {}
    rest = content[len(LLM_ERROR_PREFIX):]
    parts = rest.split("|", 1)
    return {"type": parts[0], "detail": parts[1] if len(parts) > 1 else ""}


SYSTEM_PROMPT = (
    "You are a Sikh spiritual guide grounded in Sri Guru Granth Sahib Ji. "
    "Answer only with a single JSON object and no surrounding text."
)


class LLMConfig(BaseModel):
    """Model runtime configuration."""

    model_config = ConfigDict(protected_namespaces=())

    model_name: str = "gpt-4o"
    api_url: str = "https://api.openai.com/v1/chat/completions"
    api_key: Optional[str] = None
    temperature: float = 0.7
    max_tokens: int = 1500
    timeout_sec: float = 60.0
    max_retry_attempts: int = 3
    retry_backoff_base_sec: float = 1.5
    json_mode: bool = True


def config_from_env() -> LLMConfig:
    return LLMConfig(
        model_name=_env("OPENAI_MODEL", "gpt-4o"),
        api_url=_env("OPENAI_API_URL", "https://api.openai.com/v1/chat/completions"),
        api_key=_env("OPENAI_API_KEY"),
        temperature=_env_float("LLM_TEMPERATURE", 0.7, 0.0, 2.0),
        max_tokens=_env_int("LLM_MAX_TOKENS", 1500, 200, 4000),
        max_retry_attempts=_env_int("LLM_MAX_RETRY_ATTEMPTS", 3, 1, 6),
        retry_backoff_base_sec=_env_float("LLM_RETRY_BACKOFF_BASE_SEC", 1.5, 0.0, 5.0),
    )


class LLMService:
    """Text generation against an OpenAI-compatible endpoint."""

    def __init__(self, config: Optional[LLMConfig] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config or config_from_env()
        self.call_log_path = os.getenv("LLM_CALL_LOG", "llm_call_log.txt")
        self._transport = transport

    def is_configured(self, api_key: Optional[str] = None) -> bool:
        return bool(api_key or self.config.api_key)

    def _append_call_log(self, stage: str, status: str, detail: str = "") -> None:
        if not self.call_log_path:
            return
        try:
            p = Path(__file__).resolve().parent / self.call_log_path
            p.parent.mkdir(parents=True, exist_ok=True)
            ts = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
            line = f"[{ts}] stage={stage} status={status} model={self.config.model_name} detail={detail}\n"
            with open(p, "a", encoding="utf-8") as f:
                f.write(line)
        except OSError as exc:
            print(f"[llm] call log write failed: {exc}")

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float:
        ra = response.headers.get("retry-after", "")
        if ra:
            try:
                return float(ra)
            except ValueError:
                pass
        return 2.0

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = SYSTEM_PROMPT,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        api_key: Optional[str] = None,
    ) -> str:
        """Generate text, or return an error sentinel (see ``is_llm_error``)."""
        key = api_key or self.config.api_key
        if not key:
            self._append_call_log("request", "skip", "no_api_key")
            return _llm_error("not_configured", "OpenAI API key is not configured")

        payload = {
            "model": self.config.model_name,
            "messages": [
                {"role": "system", "content": system_prompt or "You are a helpful assistant."},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.config.temperature if temperature is None else temperature,
            "max_tokens": self.config.max_tokens if max_tokens is None else max_tokens,
        }
        if self.config.json_mode:
            payload["response_format"] = {"type": "json_object"}

        started = time.time()
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_sec, transport=self._transport) as client:
                for attempt in range(self.config.max_retry_attempts):
                    response = await client.post(
                        self.config.api_url,
                        json=payload,
                        headers={
                            "Authorization": f"Bearer {key}",
                            "Content-Type": "application/json",
                        },
                    )
                    if response.status_code == 200:
                        elapsed = round(time.time() - started, 2)
                        self._append_call_log("request", "ok", f"attempt={attempt+1} http=200 sec={elapsed}")
                        result = response.json()
                        choices = result.get("choices", []) if isinstance(result, dict) else []
                        if choices:
                            return (choices[0].get("message", {}).get("content") or "").strip()
                        return ""
                    if response.status_code in (429, 500, 502, 503, 504) and attempt < (self.config.max_retry_attempts - 1):
                        if response.status_code == 429:
                            backoff = max(self._parse_retry_after(response), self.config.retry_backoff_base_sec * (2 ** attempt))
                        else:
                            backoff = self.config.retry_backoff_base_sec * (attempt + 1)
                        self._append_call_log("request", "retry", f"attempt={attempt+1} http={response.status_code} backoff={backoff:.1f}s")
                        await asyncio.sleep(backoff)
                        continue
                    self._append_call_log("request", "fail", f"attempt={attempt+1} http={response.status_code}")
                    if response.status_code == 401:
                        return _llm_error("auth", "Invalid API key")
                    if response.status_code == 429:
                        return _llm_error("rate_limit", f"http=429 after {attempt+1} attempts")
                    return _llm_error("http_error", f"http={response.status_code}")
                return _llm_error("http_error", "no attempts made")
        except Exception as exc:
            self._append_call_log("request", "error", str(exc))
            print(f"[llm] API error: {exc}")
            return _llm_error("exception", str(exc)[:200])

    async def generate_guidance(self, prompt: str, api_key: Optional[str] = None) -> str:
        return await self.generate(prompt=prompt, api_key=api_key)


llm_service = LLMService()
