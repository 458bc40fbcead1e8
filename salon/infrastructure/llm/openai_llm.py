from __future__ import annotations

import logging
from datetime import datetime

from salon.application.exceptions import LLMContractError, LLMUpstreamError, SuggestionServiceError
from salon.application.ports.marketing_assistant import MarketingAssistantPort
from salon.application.ports.suggestion_service import SuggestionServicePort
from salon.core.clock import to_business_time
from salon.core.config import settings
from salon.domain.entities.marketing import MarketingPost, MarketingPostRequest
from salon.domain.entities.suggestion import SlotSuggestion, SuggestionRequest
from salon.infrastructure.llm.openai_client import OpenAIJsonClient
from salon.infrastructure.llm.prompts import build_marketing_prompt, build_suggest_prompt


class OpenAISuggestionService(SuggestionServicePort):
    """
    OpenAI-backed adapter implementing SuggestionServicePort.

    Contract guarantees:
    - suggest returns list[SlotSuggestion] with at most `limit` items
    - shape errors raise SuggestionServiceError (wrapping LLMContractError)
    - provider failures raise SuggestionServiceError (wrapping LLMUpstreamError)

    Output is NOT trusted for validity; the booking layer re-checks every slot.
    """

    def __init__(self, client: OpenAIJsonClient | None = None, limit: int = 5) -> None:
        self._client = client or OpenAIJsonClient()
        self._limit = limit
        self._logger = logging.getLogger(__name__)

    def suggest(self, request: SuggestionRequest) -> list[SlotSuggestion]:
        prompt = build_suggest_prompt(request.to_payload(), self._limit)
        try:
            data = self._client.call_json(
                model=settings.OPENAI_MODEL_SUGGEST,
                prompt=prompt,
                temperature=settings.OPENAI_TEMPERATURE_SUGGEST,
                what="suggest",
            )
            return self._parse(data, request)[: self._limit]
        except (LLMUpstreamError, LLMContractError) as e:
            self._logger.error("Suggestion model failed", extra={"error": str(e)})
            raise SuggestionServiceError(str(e)) from e

    def _parse(self, data: object, request: SuggestionRequest) -> list[SlotSuggestion]:
        if not isinstance(data, dict):
            raise LLMContractError("Suggest: expected a JSON object with 'suggestions' key.")
        raw = data.get("suggestions")
        if not isinstance(raw, list):
            raise LLMContractError("Suggest: 'suggestions' must be a list.")

        known = {sa.stylist_id for sa in request.stylist_availability}
        out: list[SlotSuggestion] = []
        for item in raw:
            if not isinstance(item, dict):
                raise LLMContractError("Suggest: each suggestion must be an object.")
            try:
                stylist_id = str(item["stylistId"])
                start = datetime.fromisoformat(str(item["startTime"]))
                end = datetime.fromisoformat(str(item["endTime"]))
            except (KeyError, ValueError) as e:
                raise LLMContractError(f"Suggest: invalid suggestion shape: {e}")
            if stylist_id not in known:
                self._logger.warning("Dropping suggestion for unknown stylist", extra={"stylist_id": stylist_id})
                continue
            out.append(
                SlotSuggestion(
                    stylist_id=stylist_id,
                    start_time=to_business_time(start),
                    end_time=to_business_time(end),
                )
            )
        return out


class OpenAIMarketingAssistant(MarketingAssistantPort):
    def __init__(self, client: OpenAIJsonClient | None = None, business_name: str | None = None) -> None:
        self._client = client or OpenAIJsonClient()
        self._business_name = business_name or settings.BUSINESS_NAME

    def generate_post(self, request: MarketingPostRequest) -> MarketingPost:
        data = self._client.call_json(
            model=settings.OPENAI_MODEL_MARKETING,
            prompt=build_marketing_prompt(request, self._business_name),
            temperature=settings.OPENAI_TEMPERATURE_MARKETING,
            what="marketing",
        )
        if not isinstance(data, dict):
            raise LLMContractError("Marketing: expected a JSON object with 'postContent' key.")
        content = data.get("postContent")
        if not isinstance(content, str) or not content.strip():
            raise LLMContractError("Marketing: 'postContent' must be a non-empty string.")
        return MarketingPost(post_content=content.strip())
