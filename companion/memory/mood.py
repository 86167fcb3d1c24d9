from __future__ import annotations

from companion.models import Mood

# Checked in declaration order; the first mood with any keyword hit wins.
_MOOD_KEYWORDS: dict[Mood, tuple[str, ...]] = {
    Mood.HAPPY: ("happy", "excited", "great", "awesome", "wonderful"),
    Mood.SAD: ("sad", "down", "depressed", "upset", "unhappy"),
    Mood.ANGRY: ("angry", "frustrated", "mad", "annoyed"),
    Mood.CURIOUS: ("wonder", "how", "why", "what", "curious"),
}


def classify_mood(message: str) -> Mood | None:
    """Return the first mood whose keywords occur as substrings of the message."""
    text = message.lower()
    for mood, keywords in _MOOD_KEYWORDS.items():
        if any(keyword in text for keyword in keywords):
            return mood
    return None
