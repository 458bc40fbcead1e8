import json

from salon.domain.entities.marketing import MarketingPostRequest


def build_suggest_prompt(request_payload: dict, limit: int) -> str:
    return (
        "You are a scheduling assistant for a beauty salon.\n"
        "Return ONLY valid JSON. No markdown. No extra text.\n"
        "Output schema:\n"
        "  {\"suggestions\": [{\"stylistId\": \"...\", \"startTime\": \"YYYY-MM-DDTHH:MM\", \"endTime\": \"YYYY-MM-DDTHH:MM\"}]}\n"
        "Rules:\n"
        f"  - Return at most {limit} suggestions, earliest first.\n"
        "  - endTime - startTime MUST equal duration minutes.\n"
        "  - A suggestion must lie completely inside one of that stylist's availableTimes windows.\n"
        "  - A suggestion must NOT overlap any existingAppointments entry of the same stylist "
        "(touching end/start boundaries is allowed).\n"
        "  - Use only the preferredDate; never cross midnight.\n"
        "  - Only use stylistId values present in stylistAvailability.\n"
        "  - If nothing fits, return {\"suggestions\": []}.\n"
        "\n"
        f"Request: {json.dumps(request_payload, ensure_ascii=False)}\n"
    )


def build_marketing_prompt(request: MarketingPostRequest, business_name: str) -> str:
    offer = request.offer.strip() or "No special offer"
    hashtag = "#" + "".join(ch for ch in business_name if ch.isalnum())
    return (
        f"You are a social media marketing expert for a beauty salon called \"{business_name}\".\n"
        "Your task is to write a short, engaging post for platforms like Instagram or Facebook.\n"
        "Return ONLY valid JSON. No markdown. No extra text.\n"
        "Output schema:\n"
        "  {\"postContent\": \"...\"}\n"
        "\n"
        f"The post must promote the following service: {request.service_name}\n"
        f"Incorporate the following special offer: {offer}\n"
        f"The tone of the post should be: {request.tone.value}\n"
        "\n"
        "The final post should be concise (2-3 paragraphs max), use relevant emojis to be visually appealing, "
        "and include a clear call to action to book an appointment. "
        f"End with a few relevant hashtags like {hashtag}, #Belleza, #PromocionSalon.\n"
    )
