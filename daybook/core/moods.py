"""
Mood catalogue.

Groups the moods offered when writing an entry into Positive,
Neutral and Negative families for the review screens.
"""

from typing import Dict, List

MOODS_BY_CATEGORY: Dict[str, List[str]] = {
    "Positive": ["Happy", "Excited", "Relaxed", "Grateful", "Confident"],
    "Neutral": ["Calm", "Thoughtful", "Curious", "Nostalgic", "Bored"],
    "Negative": ["Sad", "Angry", "Stressed", "Lonely", "Anxious"],
}

# Moods outside the catalogue fall here
DEFAULT_MOOD_CATEGORY = "Neutral"


def all_moods() -> List[str]:
    """All catalogue moods, alphabetical."""
    return sorted(mood for moods in MOODS_BY_CATEGORY.values() for mood in moods)


def get_mood_category(mood: str) -> str:
    """
    Get the family a mood belongs to.

    Matching ignores case. Unknown moods are Neutral.
    """
    needle = (mood or "").strip().lower()

    for category, moods in MOODS_BY_CATEGORY.items():
        if any(m.lower() == needle for m in moods):
            return category

    return DEFAULT_MOOD_CATEGORY
