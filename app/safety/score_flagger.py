"""
Assessment score flagging.

Turns a completed assessment's score summary into zero or more flags,
each pointing at the support resources relevant to it. Thresholds are
independent: any subset can fire, and one never suppresses another.
"""

import logging
import operator
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from app.safety.lexicon import ScoreThresholds
from app.safety.models import AssessmentFlag, AssessmentScoreSummary
from app.safety.resources import DEFAULT_CATALOG, ResourceCatalog, ResourceResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlagRule:
    """One threshold check against a named summary field."""

    flag_type: str
    field: str
    compare: Callable[[float, float], bool]
    message: str
    resource_domain: str
    resource_key: str
    severity: Optional[str] = None


# Evaluation order is part of the output contract.
FLAG_RULES: tuple[FlagRule, ...] = (
    FlagRule(
        flag_type="adhd",
        field="adhd_probability",
        compare=operator.gt,
        message="Your responses suggest strong ADHD traits",
        resource_domain="neurodivergent",
        resource_key="adhd",
    ),
    FlagRule(
        flag_type="autism",
        field="autism_probability",
        compare=operator.gt,
        message="Your responses suggest autistic traits",
        resource_domain="neurodivergent",
        resource_key="autism",
    ),
    FlagRule(
        flag_type="dyslexia",
        field="dyslexia_indicators",
        compare=operator.gt,
        message="Your responses suggest possible dyslexia",
        resource_domain="neurodivergent",
        resource_key="dyslexia",
    ),
    FlagRule(
        flag_type="depression",
        field="depression_score",
        compare=operator.ge,
        message="Your mood responses suggest you may benefit from support",
        resource_domain="mental_health",
        resource_key="therapy",
        severity="moderate-severe",
    ),
    FlagRule(
        flag_type="anxiety",
        field="anxiety_score",
        compare=operator.ge,
        message="Your anxiety levels appear elevated",
        resource_domain="mental_health",
        resource_key="therapy",
        severity="severe",
    ),
)


class ScoreFlagger:
    """
    Evaluates assessment scores against fixed thresholds.

    Usage:
        flagger = ScoreFlagger()
        flags = flagger.flag_from_scores({"depression_score": 16})
        [f.type for f in flags]  # ["depression"]
    """

    def __init__(
        self,
        thresholds: Optional[ScoreThresholds] = None,
        catalog: ResourceCatalog = DEFAULT_CATALOG,
    ):
        self.thresholds = thresholds or ScoreThresholds()
        self.resolver = ResourceResolver(catalog)

    def flag_from_scores(
        self,
        result: Union[AssessmentScoreSummary, Mapping[str, Any], None],
    ) -> list[AssessmentFlag]:
        """
        Produce flags for every threshold the summary crosses.

        Args:
            result: Score summary (model or plain mapping); missing fields
                    never produce a flag

        Returns:
            Flags in fixed order: adhd, autism, dyslexia, depression, anxiety
        """
        if result is None:
            return []

        summary = (
            result if isinstance(result, AssessmentScoreSummary)
            else AssessmentScoreSummary.model_validate(dict(result))
        )

        flags: list[AssessmentFlag] = []
        for rule in FLAG_RULES:
            value = getattr(summary, rule.field)
            if value is None:
                continue

            cutoff = getattr(self.thresholds, rule.field)
            if not rule.compare(value, cutoff):
                continue

            flags.append(AssessmentFlag(
                type=rule.flag_type,
                message=rule.message,
                confidence=None if rule.severity else value,
                severity=rule.severity,
                resources=self.resolver.resolve_flag_resources(
                    rule.resource_domain,
                    rule.resource_key,
                    rule.message,
                ),
            ))

        if flags:
            logger.info(f"Assessment flags raised: {[flag.type for flag in flags]}")
        return flags
