"""
Crisis Detection Module

Screens free text typed during an assessment for self-harm, severe
distress and trauma language, and attaches the support resources the
matched tier calls for.

IMPORTANT: This is a supplementary safety layer, not a replacement
for professional crisis intervention services.
"""

import logging
from typing import Callable, Optional

from app.safety.lexicon import Lexicon, SafetyConfig, normalize_text
from app.safety.models import LEVEL_ACTIONS, CrisisLevel, CrisisResult
from app.safety.resources import ResourceResolver

logger = logging.getLogger(__name__)

LocaleProvider = Callable[[], str]


class CrisisDetector:
    """
    Classifies text into the highest-priority crisis tier it matches.

    Tiers are checked in a fixed order:
    1. severe: first matching phrase wins immediately
    2. moderate: every phrase is tallied; wins at the vote threshold
    3. trauma: first matching phrase wins

    Usage:
        detector = CrisisDetector()
        result = detector.classify("I want to die")
        if result is not None:
            print(result.level, result.action)
    """

    def __init__(
        self,
        config: Optional[SafetyConfig] = None,
        resolver: Optional[ResourceResolver] = None,
        locale_provider: Optional[LocaleProvider] = None,
    ):
        """
        Initialize Crisis Detector.

        Args:
            config: Lexicon and thresholds (defaults to the built-in lexicon)
            resolver: Resource resolver (defaults to one over config.catalog)
            locale_provider: Returns the ambient locale when classify()
                            is not given one explicitly
        """
        self.config = config or SafetyConfig()
        self.resolver = resolver or ResourceResolver(self.config.catalog)
        self._locale_provider = locale_provider or (lambda: self.config.default_locale)

        logger.info(
            f"CrisisDetector initialized with lexicon={self.lexicon.version}, "
            f"severe={len(self.lexicon.severe)}, moderate={len(self.lexicon.moderate)}, "
            f"trauma={len(self.lexicon.trauma)}, "
            f"moderate_votes={self.config.moderate_vote_threshold}"
        )

    @property
    def lexicon(self) -> Lexicon:
        return self.config.lexicon

    def classify(
        self,
        text: Optional[str],
        locale: Optional[str] = None,
    ) -> Optional[CrisisResult]:
        """
        Analyze text for crisis language.

        Args:
            text: User-authored text; None or blank means no signal
            locale: Locale for crisis resources (defaults to the provider)

        Returns:
            CrisisResult for the winning tier, or None if nothing matched
        """
        if not text or not text.strip():
            return None

        normalized = normalize_text(text)

        for phrase in self.lexicon.severe:
            if phrase in normalized:
                logger.warning(
                    f"Crisis language detected: level={CrisisLevel.SEVERE.value}, "
                    f"lexicon={self.lexicon.version}"
                )
                return self._result(CrisisLevel.SEVERE, (phrase,), locale)

        moderate_hits = tuple(
            phrase for phrase in self.lexicon.moderate if phrase in normalized
        )
        if len(moderate_hits) >= self.config.moderate_vote_threshold:
            logger.info(
                f"Distress language detected: level={CrisisLevel.MODERATE.value}, "
                f"hits={len(moderate_hits)}"
            )
            return self._result(CrisisLevel.MODERATE, moderate_hits, locale)

        for phrase in self.lexicon.trauma:
            if phrase in normalized:
                logger.info(f"Trauma language detected: level={CrisisLevel.TRAUMA.value}")
                return self._result(CrisisLevel.TRAUMA, (phrase,), locale)

        if moderate_hits:
            logger.debug(
                f"Moderate hits below threshold: {len(moderate_hits)}"
                f"/{self.config.moderate_vote_threshold}"
            )
        return None

    def _result(
        self,
        level: CrisisLevel,
        matched: tuple[str, ...],
        locale: Optional[str],
    ) -> CrisisResult:
        if level == CrisisLevel.SEVERE and locale is None:
            locale = self._locale_provider()
        return CrisisResult(
            level=level,
            action=LEVEL_ACTIONS[level],
            resources=self.resolver.resolve_for_level(level, locale),
            matched_phrases=matched,
        )

    def is_crisis(self, text: Optional[str]) -> bool:
        """
        Quick check for severe (immediate-action) crisis language.

        Args:
            text: User text to check

        Returns:
            True only for the severe tier; moderate and trauma matches are not crises
        """
        result = self.classify(text)
        return result is not None and result.level == CrisisLevel.SEVERE


# ==================================
# Singleton & Convenience Functions
# ==================================

_detector_instance: Optional[CrisisDetector] = None


def get_detector(config: Optional[SafetyConfig] = None) -> CrisisDetector:
    """
    Get or create singleton CrisisDetector instance.

    Args:
        config: Safety configuration used on first creation

    Returns:
        CrisisDetector instance
    """
    global _detector_instance
    if _detector_instance is None:
        _detector_instance = CrisisDetector(config=config)
    return _detector_instance


def classify_text(text: Optional[str], locale: Optional[str] = None) -> Optional[CrisisResult]:
    """Convenience function to classify text with the shared detector."""
    return get_detector().classify(text, locale)


def is_crisis(text: Optional[str]) -> bool:
    """Convenience function to check text for severe crisis language."""
    return get_detector().is_crisis(text)
