"""Tests for lexicon construction and safety configuration."""

from dataclasses import FrozenInstanceError
from datetime import timedelta

import pytest

from app.config import Settings
from app.safety.lexicon import Lexicon, SafetyConfig, ScoreThresholds, normalize_text


class TestNormalizeText:

    def test_lowercases(self):
        assert normalize_text("I Want To DIE") == "i want to die"

    def test_drops_straight_and_curly_apostrophes(self):
        assert normalize_text("Can't") == "cant"
        assert normalize_text("Can’t") == "cant"


class TestLexicon:
    """Test phrase list validation."""

    def test_default_tiers(self):
        lexicon = Lexicon()

        assert lexicon.severe[0] == "want to die"
        assert "cant cope" in lexicon.moderate
        assert "hypervigilant" in lexicon.trauma

    def test_phrases_are_normalized(self):
        lexicon = Lexicon(severe=("Kill Myself",), moderate=("Can't Cope",), trauma=("PTSD",))

        assert lexicon.severe == ("kill myself",)
        assert lexicon.moderate == ("cant cope",)
        assert lexicon.trauma == ("ptsd",)

    def test_duplicates_collapse_in_order(self):
        lexicon = Lexicon(severe=("b", "a", "B"), moderate=("m",), trauma=("t",))

        assert lexicon.severe == ("b", "a")

    def test_empty_tier_rejected(self):
        with pytest.raises(ValueError, match="moderate"):
            Lexicon(severe=("x",), moderate=("  ",), trauma=("t",))

    def test_overlapping_tiers_rejected(self):
        with pytest.raises(ValueError, match="panic"):
            Lexicon(severe=("panic",), moderate=("m",), trauma=("panic",))

    def test_immutable(self):
        lexicon = Lexicon()

        with pytest.raises(FrozenInstanceError):
            lexicon.severe = ("anything",)


class TestSafetyConfig:
    """Test configuration assembly."""

    def test_defaults(self):
        config = SafetyConfig()

        assert config.moderate_vote_threshold == 2
        assert config.follow_up_cooldown == timedelta(minutes=10)
        assert config.thresholds == ScoreThresholds()

    def test_vote_threshold_must_be_positive(self):
        with pytest.raises(ValueError):
            SafetyConfig(moderate_vote_threshold=0)

    def test_from_settings(self):
        settings = Settings(
            follow_up_cooldown_seconds=90,
            moderate_vote_threshold=3,
            depression_score_threshold=10,
            default_locale="en-GB",
            lexicon_version="test-1",
        )

        config = SafetyConfig.from_settings(settings)

        assert config.follow_up_cooldown == timedelta(seconds=90)
        assert config.moderate_vote_threshold == 3
        assert config.thresholds.depression_score == 10
        assert config.default_locale == "en-GB"
        assert config.lexicon.version == "test-1"
