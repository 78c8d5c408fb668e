"""Tests for assessment score flagging."""

import pytest

from app.safety.lexicon import ScoreThresholds
from app.safety.models import AssessmentScoreSummary
from app.safety.score_flagger import ScoreFlagger


class TestScoreFlagger:
    """Test independent threshold checks."""

    @pytest.fixture
    def flagger(self):
        return ScoreFlagger()

    def test_empty_summary(self, flagger):
        """No fields, no flags."""
        assert flagger.flag_from_scores({}) == []

    def test_none_summary(self, flagger):
        assert flagger.flag_from_scores(None) == []

    def test_explicit_none_fields(self, flagger):
        """Missing values never flag and never raise."""
        summary = AssessmentScoreSummary(adhd_probability=None, depression_score=None)

        assert flagger.flag_from_scores(summary) == []

    def test_depression_only(self, flagger):
        flags = flagger.flag_from_scores({"depression_score": 16, "anxiety_score": 5})

        assert [f.type for f in flags] == ["depression"]
        flag = flags[0]
        assert flag.severity == "moderate-severe"
        assert flag.message == "Your mood responses suggest you may benefit from support"
        assert flag.resources.entries["therapy"].name == "Psychology Today"

    def test_adhd_and_autism_in_order(self, flagger):
        flags = flagger.flag_from_scores({"adhd_probability": 0.85, "autism_probability": 0.9})

        assert [f.type for f in flags] == ["adhd", "autism"]
        assert flags[0].confidence == 0.85
        assert flags[1].resources.entries["autism"].name == "Autistic Self Advocacy Network"

    def test_depression_boundary(self, flagger):
        """14 does not flag, 15 does."""
        below = flagger.flag_from_scores({"depression_score": 14})
        at = flagger.flag_from_scores({"depression_score": 15})

        assert below == []
        assert [f.type for f in at] == ["depression"]

    def test_probability_boundary_is_strict(self, flagger):
        """Probabilities must exceed the cut-off."""
        assert flagger.flag_from_scores({"adhd_probability": 0.8}) == []
        assert flagger.flag_from_scores({"dyslexia_indicators": 0.7}) == []
        assert [f.type for f in flagger.flag_from_scores({"dyslexia_indicators": 0.71})] == ["dyslexia"]

    def test_all_flags(self, flagger):
        """Every threshold can fire at once, in fixed order."""
        flags = flagger.flag_from_scores({
            "anxiety_score": 21,
            "depression_score": 27,
            "dyslexia_indicators": 0.9,
            "autism_probability": 0.95,
            "adhd_probability": 0.99,
        })

        assert [f.type for f in flags] == ["adhd", "autism", "dyslexia", "depression", "anxiety"]
        assert flags[-1].severity == "severe"
        assert flags[-1].message == "Your anxiety levels appear elevated"

    def test_stable_across_calls(self, flagger):
        summary = {"adhd_probability": 0.9, "anxiety_score": 15}

        assert flagger.flag_from_scores(summary) == flagger.flag_from_scores(summary)

    def test_unknown_fields_ignored(self, flagger):
        flags = flagger.flag_from_scores({"openness": 0.99, "anxiety_score": 18})

        assert [f.type for f in flags] == ["anxiety"]

    def test_custom_thresholds(self):
        flagger = ScoreFlagger(thresholds=ScoreThresholds(depression_score=10))

        assert [f.type for f in flagger.flag_from_scores({"depression_score": 10})] == ["depression"]
