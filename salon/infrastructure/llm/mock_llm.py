from __future__ import annotations

from salon.application.ports.marketing_assistant import MarketingAssistantPort
from salon.core.config import settings
from salon.domain.entities.marketing import MarketingPost, MarketingPostRequest, Tone


class MockMarketingAssistant(MarketingAssistantPort):
    def __init__(self, business_name: str | None = None) -> None:
        self._business_name = business_name or settings.BUSINESS_NAME

    def generate_post(self, request: MarketingPostRequest) -> MarketingPost:
        opener = {
            Tone.professional: "Discover our",
            Tone.friendly: "Treat yourself to our",
            Tone.elegant: "Indulge in our exquisite",
            Tone.energetic: "Get ready for our amazing",
        }.get(request.tone, "Discover our")

        paragraphs = [f"✨ {opener} {request.service_name} at {self._business_name}! ✨"]
        if request.offer.strip():
            paragraphs.append(f"🎁 {request.offer.strip()}")
        paragraphs.append("📅 Book your appointment today!")

        service_tag = "".join(ch for ch in request.service_name.title() if ch.isalnum())
        business_tag = "".join(ch for ch in self._business_name if ch.isalnum())
        paragraphs.append(f"#{business_tag} #Belleza #{service_tag} #PromocionSalon")
        return MarketingPost(post_content="\n\n".join(paragraphs))
