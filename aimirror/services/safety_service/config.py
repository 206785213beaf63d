"""Safety Service configuration: crisis phrases and the fixed crisis reply.

The phrase list favors recall over precision. A false positive only
redirects the user to real-world support; a false negative lets crisis
content reach the model.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SafetyConfig:
    """Configuration for crisis scanning behavior."""

    # Version tracking for the phrase list and crisis reply
    pattern_version: str = "2025.01.10"


# Matched as lowercase substrings of the latest user message.
# Straight and curly apostrophe variants are both listed; no normalization
# happens before matching.
CRISIS_PHRASES: Tuple[str, ...] = (
    "suicide",
    "suicidal",
    "kill myself",
    "end my life",
    "no reason to live",
    "want to die",
    "hurt myself",
    "self harm",
    "self-harm",
    "overdose",
    "can’t go on",
    "can't go on",
)

# Shown verbatim whenever the crisis gate fires. Never model-generated.
CRISIS_PARAGRAPHS: Tuple[str, ...] = (
    "I’m hearing a level of distress that sounds like a real crisis.",
    "I’m not able to help with emergencies or keep you safe here.",
    "If you are in immediate danger or considering harming yourself, please contact "
    "your local emergency services or a trusted person near you right now.",
    "If available in your country, you can also reach out to a crisis hotline or "
    "mental health professional.",
    "You do not have to navigate this alone — please reach out to real-world support.",
    "You can write one simple sentence about who you will contact or what safe step "
    "you will take next.",
)

CRISIS_MESSAGE: str = "\n\n".join(CRISIS_PARAGRAPHS)
