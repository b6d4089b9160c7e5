"""
Generation client for the career tools.

Talks to an OpenAI-compatible Chat Completions endpoint (Groq by default) and
turns upstream failures into typed errors the API layer can report.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an expert career advisor, resume writer and interview coach."
JSON_SYSTEM_PROMPT = SYSTEM_PROMPT + " Always provide valid JSON responses."

T = TypeVar("T", bound=BaseModel)


class GenerationError(Exception):
    """The generation service could not produce a result."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RequestTooLargeError(GenerationError):
    """Upstream rejected the prompt as exceeding its token limit."""


class ModelUnavailableError(GenerationError):
    """The configured model does not exist or the key has no access to it."""


class InvalidModelOutputError(GenerationError):
    """A structured reply could not be parsed or did not match its schema."""


class NotConfiguredError(GenerationError):
    """No API key is configured for the generation service."""


def classify_upstream_error(status_code: int, body: str) -> GenerationError:
    text = body or ""
    lowered = text.lower()
    message = f"API call failed: {status_code} {text}"
    if status_code == 413 or "request too large" in lowered:
        return RequestTooLargeError(message, status_code, text)
    if "does not exist" in lowered or "do not have access" in lowered:
        return ModelUnavailableError(message, status_code, text)
    return GenerationError(message, status_code, text)


_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def extract_json(text: str) -> Any:
    """Pull a JSON value out of a model reply (bare, fenced, or wrapped in prose)."""
    candidate = text.strip()
    fenced = _FENCE_RE.search(candidate)
    if fenced:
        candidate = fenced.group(1).strip()
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        pass
    start, end = candidate.find("{"), candidate.rfind("}")
    if start == -1 or end <= start:
        raise InvalidModelOutputError("Model reply did not contain a JSON object")
    try:
        return json.loads(candidate[start : end + 1])
    except json.JSONDecodeError as e:
        raise InvalidModelOutputError(f"Model reply was not valid JSON: {e}") from e


class GenerationClient:
    """Thin async wrapper over the Chat Completions API."""

    def __init__(self, settings: Optional[Settings] = None, model: Optional[str] = None):
        self.settings = settings or get_settings()
        self.api_key = self.settings.groq_api_key
        self.model = model or self.settings.ai_model
        self.base_url = self.settings.groq_base_url.rstrip("/")
        self.timeout = self.settings.ai_timeout_seconds

    async def generate_text(self, prompt: str, max_tokens: int, temperature: float = 0.7) -> str:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        return await self._chat(messages, max_tokens=max_tokens, temperature=temperature)

    async def generate_object(self, prompt: str, schema: Type[T], max_tokens: int, temperature: float = 0.3) -> T:
        schema_json = json.dumps(schema.model_json_schema(), indent=2)
        full_prompt = (
            f"{prompt}\n\n"
            f"Respond with a single JSON object matching this JSON schema:\n{schema_json}\n\n"
            "Return only JSON. Do not include any commentary."
        )
        messages = [
            {"role": "system", "content": JSON_SYSTEM_PROMPT},
            {"role": "user", "content": full_prompt},
        ]
        content = await self._chat(messages, max_tokens=max_tokens, temperature=temperature)
        data = extract_json(content)
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            raise InvalidModelOutputError(f"Model reply did not match {schema.__name__}: {e}") from e

    async def _chat(self, messages: List[Dict[str, str]], max_tokens: int, temperature: float) -> str:
        if not self.api_key:
            raise NotConfiguredError("AI service not configured")

        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(f"{self.base_url}/chat/completions", headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise GenerationError(f"API call failed: {e}") from e

        if response.status_code != 200:
            logger.warning(f"Generation API returned {response.status_code} for model {self.model}")
            raise classify_upstream_error(response.status_code, response.text)

        try:
            result = response.json()
            return result["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise GenerationError(f"Unexpected response shape from generation API: {e}") from e


def get_generation_client(settings: Optional[Settings] = None) -> GenerationClient:
    """Get a generation client bound to the current settings."""
    return GenerationClient(settings=settings)
