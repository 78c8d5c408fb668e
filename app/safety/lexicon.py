"""
Crisis lexicon and clinical thresholds.

Static, versioned configuration for the safety layer. Nothing here has
behavior beyond validation and normalization at construction time; the
detector, flagger and resolver receive a SafetyConfig and never modify it.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING, Iterable

from app.safety.models import CrisisLevel
from app.safety.resources import DEFAULT_CATALOG, ResourceCatalog

if TYPE_CHECKING:
    from app.config import Settings

logger = logging.getLogger(__name__)

_APOSTROPHES = ("’", "‘", "ʼ", "`")


def normalize_text(text: str) -> str:
    """Lowercase and drop apostrophes so "can't" and "cant" compare equal."""
    lowered = text.lower()
    for mark in _APOSTROPHES:
        lowered = lowered.replace(mark, "'")
    return lowered.replace("'", "")


# ==================================
# Default Phrase Lists
# ==================================

SEVERE_PHRASES: tuple[str, ...] = (
    "want to die",
    "kill myself",
    "end it all",
    "suicide",
    "not worth living",
    "better off dead",
    "no point",
    "self harm",
    "hurt myself",
    "cutting",
)

MODERATE_PHRASES: tuple[str, ...] = (
    "hopeless",
    "worthless",
    "cant go on",
    "giving up",
    "no way out",
    "trapped",
    "unbearable",
    "cant cope",
)

TRAUMA_PHRASES: tuple[str, ...] = (
    "flashback",
    "panic",
    "triggered",
    "ptsd",
    "nightmare",
    "dissociate",
    "numb",
    "hypervigilant",
)


@dataclass(frozen=True)
class Lexicon:
    """Phrase lists per severity tier.

    Tiers are checked severe -> moderate -> trauma. Phrases are normalized
    on construction; an empty tier or a phrase shared between tiers is a
    configuration error.
    """

    severe: tuple[str, ...] = SEVERE_PHRASES
    moderate: tuple[str, ...] = MODERATE_PHRASES
    trauma: tuple[str, ...] = TRAUMA_PHRASES
    version: str = "2024.1"

    def __post_init__(self):
        seen: dict[str, str] = {}
        for level in CrisisLevel:
            phrases = _normalize_phrases(getattr(self, level.value))
            if not phrases:
                raise ValueError(f"Lexicon tier '{level.value}' must not be empty")
            for phrase in phrases:
                if phrase in seen and seen[phrase] != level.value:
                    raise ValueError(
                        f"Phrase '{phrase}' appears in both "
                        f"'{seen[phrase]}' and '{level.value}' tiers"
                    )
                seen[phrase] = level.value
            object.__setattr__(self, level.value, phrases)

    def phrases_for(self, level: CrisisLevel) -> tuple[str, ...]:
        return getattr(self, level.value)


def _normalize_phrases(phrases: Iterable[str]) -> tuple[str, ...]:
    """Normalize, drop blanks and duplicates, keep first-seen order."""
    ordered: dict[str, None] = {}
    for phrase in phrases:
        cleaned = normalize_text(phrase).strip()
        if cleaned:
            ordered.setdefault(cleaned, None)
    return tuple(ordered)


@dataclass(frozen=True)
class ScoreThresholds:
    """Cut-offs for score-based flags.

    Probabilities and the dyslexia indicator flag when strictly above the
    cut-off; the PHQ-9 and GAD-7 style totals flag at or above it.
    """

    adhd_probability: float = 0.8
    autism_probability: float = 0.8
    dyslexia_indicators: float = 0.7
    depression_score: float = 15
    anxiety_score: float = 15


@dataclass(frozen=True)
class SafetyConfig:
    """Everything the safety layer needs, built once at start-up."""

    lexicon: Lexicon = field(default_factory=Lexicon)
    thresholds: ScoreThresholds = field(default_factory=ScoreThresholds)
    catalog: ResourceCatalog = DEFAULT_CATALOG
    moderate_vote_threshold: int = 2
    follow_up_cooldown: timedelta = timedelta(minutes=10)
    default_locale: str = "en-US"

    def __post_init__(self):
        if self.moderate_vote_threshold < 1:
            raise ValueError("moderate_vote_threshold must be at least 1")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SafetyConfig":
        """Build the safety configuration from application settings."""
        config = cls(
            lexicon=Lexicon(version=settings.lexicon_version),
            thresholds=ScoreThresholds(
                adhd_probability=settings.adhd_probability_threshold,
                autism_probability=settings.autism_probability_threshold,
                dyslexia_indicators=settings.dyslexia_indicator_threshold,
                depression_score=settings.depression_score_threshold,
                anxiety_score=settings.anxiety_score_threshold,
            ),
            moderate_vote_threshold=settings.moderate_vote_threshold,
            follow_up_cooldown=timedelta(seconds=settings.follow_up_cooldown_seconds),
            default_locale=settings.default_locale,
        )
        logger.info(
            f"SafetyConfig loaded: lexicon={config.lexicon.version}, "
            f"votes={config.moderate_vote_threshold}, "
            f"cooldown={int(config.follow_up_cooldown.total_seconds())}s"
        )
        return config
