"""
Type definitions used across layers
"""

from enum import StrEnum


class Theme(StrEnum):
    MYSTERY = "mystery"
    HISTORICAL = "historical"
    FANTASY = "fantasy"
    SCI_FI = "sci-fi"
    COMEDY = "comedy"
    HORROR = "horror"


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Role(StrEnum):
    USER = "user"
    ADMIN = "admin"


# --- NOTE puzzle and venue types are not enforced on stored content (AI output drifts), these list the values the prompts ask for.
class PuzzleType(StrEnum):
    LOGIC = "logic"
    OBSERVATION = "observation"
    CIPHER = "cipher"
    DEDUCTION = "deduction"
    LOCAL = "local"
    WORDPLAY = "wordplay"
    MATH = "math"
    PATTERN = "pattern"


class VenueType(StrEnum):
    TRADITIONAL_PUB = "traditional-pub"
    MODERN_BAR = "modern-bar"
    GASTROPUB = "gastropub"
    BREWERY = "brewery"
    WINE_BAR = "wine-bar"
    COCKTAIL_LOUNGE = "cocktail-lounge"


class AIProvider(StrEnum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
