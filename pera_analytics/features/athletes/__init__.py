"""Athletes module: roster members and their personal bests."""

from .models import Athlete, PersonalBest

__all__ = [
    "Athlete",
    "PersonalBest",
]
