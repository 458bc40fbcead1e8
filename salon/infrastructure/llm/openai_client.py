from __future__ import annotations

import json
from typing import Any

from openai import OpenAI

from salon.application.exceptions import LLMContractError, LLMUpstreamError
from salon.core.config import settings


class OpenAIJsonClient:
    """Thin wrapper around chat completions that always asks for a JSON object back."""

    def __init__(self, client: OpenAI | None = None) -> None:
        self.client = client or OpenAI(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
        )

    def call_json(self, model: str, prompt: str, temperature: float, what: str, max_tokens: int = 1200) -> Any:
        return parse_json(self.call_text(model, prompt, temperature, max_tokens=max_tokens), what=what)

    def call_text(self, model: str, prompt: str, temperature: float, max_tokens: int = 1200) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": "Return only valid JSON. Do not include markdown or extra text."},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            raise LLMUpstreamError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise LLMContractError("LLM returned empty response text.")

        return content


def parse_json(text: str, what: str) -> Any:
    try:
        return json.loads(text)
    except Exception:
        snippet = text[:200].replace("\n", " ")
        raise LLMContractError(f"{what.capitalize()}: invalid JSON. Snippet: {snippet!r}")
