from __future__ import annotations

from abc import ABC, abstractmethod

from salon.domain.entities.marketing import MarketingPost, MarketingPostRequest


class MarketingAssistantPort(ABC):
    @abstractmethod
    def generate_post(self, request: MarketingPostRequest) -> MarketingPost:
        """
        Write a short social-media post promoting one service.

        Raises:
            LLMUpstreamError: provider failure
            LLMContractError: provider answered with an unusable payload
        """
        raise NotImplementedError
