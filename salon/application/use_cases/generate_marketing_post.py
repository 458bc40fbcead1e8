from __future__ import annotations

import logging

from salon.application.exceptions import ValidationError
from salon.application.ports.marketing_assistant import MarketingAssistantPort
from salon.application.utils.validation import require_text
from salon.domain.entities.marketing import MarketingPost, MarketingPostRequest, Tone


class GenerateMarketingPostUseCase:
    def __init__(self, assistant: MarketingAssistantPort) -> None:
        self._assistant = assistant
        self._logger = logging.getLogger(__name__)

    def execute(self, service_name: str, offer: str = "", tone: str = Tone.friendly.value) -> MarketingPost:
        try:
            tone_value = Tone(tone)
        except ValueError as e:
            raise ValidationError(f"Unknown tone {tone!r}") from e

        request = MarketingPostRequest(
            service_name=require_text(service_name, "service_name"),
            offer=(offer or "").strip(),
            tone=tone_value,
        )
        post = self._assistant.generate_post(request)
        self._logger.info("Marketing post generated", extra={"service": request.service_name})
        return post
