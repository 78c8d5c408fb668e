"""
Safety Module

Crisis-language detection, assessment score flagging, support resource
resolution, intervention presentation and follow-up re-engagement.
"""

from app.safety.models import (
    # Enums
    CrisisLevel,
    InterventionAction,
    ResourcePriority,

    # Models
    Resource,
    CrisisResources,
    ResourceGroup,
    CrisisResult,
    AssessmentScoreSummary,
    AssessmentFlag,
    InterventionRecord,
    InterventionView,
    ResourceView,
    Affordance,
    ActionView,
    FollowUpBanner,
)

from app.safety.lexicon import (
    Lexicon,
    ScoreThresholds,
    SafetyConfig,
    normalize_text,
)

from app.safety.resources import (
    ResourceCatalog,
    ResourceResolver,
    DEFAULT_CATALOG,
    locale_regions,
)

from app.safety.crisis_detector import (
    CrisisDetector,
    get_detector as get_crisis_detector,
    classify_text,
    is_crisis,
)

from app.safety.score_flagger import ScoreFlagger

from app.safety.intervention_store import (
    InterventionStore,
    get_intervention_store,
)

from app.safety.rendering import (
    InterventionRenderer,
    CollectingRenderer,
    HtmlRenderer,
)

from app.safety.presenter import (
    InterventionPresenter,
    build_intervention_view,
)

from app.safety.follow_up import FollowUpScheduler

from app.safety.pipeline import (
    SafetyPipeline,
    TextScreeningResult,
    ScoreScreeningResult,
    get_safety_pipeline,
)

__all__ = [
    # Enums
    "CrisisLevel",
    "InterventionAction",
    "ResourcePriority",

    # Models
    "Resource",
    "CrisisResources",
    "ResourceGroup",
    "CrisisResult",
    "AssessmentScoreSummary",
    "AssessmentFlag",
    "InterventionRecord",
    "InterventionView",
    "ResourceView",
    "Affordance",
    "ActionView",
    "FollowUpBanner",

    # Configuration
    "Lexicon",
    "ScoreThresholds",
    "SafetyConfig",
    "normalize_text",

    # Resources
    "ResourceCatalog",
    "ResourceResolver",
    "DEFAULT_CATALOG",
    "locale_regions",

    # Crisis Detector
    "CrisisDetector",
    "get_crisis_detector",
    "classify_text",
    "is_crisis",

    # Score Flagger
    "ScoreFlagger",

    # Storage
    "InterventionStore",
    "get_intervention_store",

    # Rendering
    "InterventionRenderer",
    "CollectingRenderer",
    "HtmlRenderer",

    # Presentation & Follow-up
    "InterventionPresenter",
    "build_intervention_view",
    "FollowUpScheduler",

    # Pipeline
    "SafetyPipeline",
    "TextScreeningResult",
    "ScoreScreeningResult",
    "get_safety_pipeline",
]
