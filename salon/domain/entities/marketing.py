from dataclasses import dataclass
from enum import Enum


class Tone(str, Enum):
    professional = "professional"
    friendly = "friendly"
    elegant = "elegant"
    energetic = "energetic"


@dataclass(frozen=True)
class MarketingPostRequest:
    service_name: str
    offer: str = ""
    tone: Tone = Tone.friendly


@dataclass(frozen=True)
class MarketingPost:
    post_content: str
