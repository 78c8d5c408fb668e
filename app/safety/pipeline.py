"""
Safety Pipeline Orchestrator

Wires the crisis detector, score flagger, intervention presenter and
follow-up scheduler into the flow used by the assessment:

    text   -> CrisisDetector -> ResourceResolver -> InterventionPresenter
    scores -> ScoreFlagger   -> ResourceResolver -> InterventionPresenter
    later  -> FollowUpScheduler (reads the record the presenter wrote)
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from app.config import settings
from app.safety.crisis_detector import CrisisDetector
from app.safety.follow_up import FollowUpScheduler
from app.safety.intervention_store import InterventionStore, get_intervention_store
from app.safety.lexicon import SafetyConfig
from app.safety.models import (
    AssessmentFlag,
    AssessmentScoreSummary,
    CrisisResult,
    FollowUpBanner,
    InterventionView,
)
from app.safety.presenter import Clock, InterventionPresenter
from app.safety.rendering import CollectingRenderer, InterventionRenderer
from app.safety.score_flagger import ScoreFlagger

logger = logging.getLogger(__name__)


@dataclass
class TextScreeningResult:
    """Result of screening free text."""

    result: Optional[CrisisResult] = None
    view: Optional[InterventionView] = None
    processing_time_ms: float = 0.0

    @property
    def intervened(self) -> bool:
        return self.view is not None


@dataclass
class ScoreScreeningResult:
    """Result of screening assessment scores."""

    flags: list[AssessmentFlag] = field(default_factory=list)
    views: list[InterventionView] = field(default_factory=list)
    processing_time_ms: float = 0.0


class SafetyPipeline:
    """
    Single entry point for the safety layer.

    Usage:
        pipeline = SafetyPipeline()
        screened = await pipeline.screen_text("session-1", "I want to die", "en-US")
        if screened.intervened:
            show(screened.view)

        banner = await pipeline.check_follow_up("session-1")
    """

    def __init__(
        self,
        config: Optional[SafetyConfig] = None,
        store: Optional[InterventionStore] = None,
        renderer: Optional[InterventionRenderer] = None,
        clock: Optional[Clock] = None,
        detector: Optional[CrisisDetector] = None,
        flagger: Optional[ScoreFlagger] = None,
    ):
        """
        Initialize Safety Pipeline.

        Args:
            config: Lexicon, thresholds and timings
            store: Session storage for the intervention record
            renderer: Where views and banners are rendered
            clock: Time source shared by presenter and scheduler
            detector: Pre-built detector (shared between renderer variants)
            flagger: Pre-built flagger (shared between renderer variants)
        """
        self.config = config or SafetyConfig()
        self.store = store or InterventionStore()
        self.renderer = renderer or CollectingRenderer()
        self._clock = clock

        self.detector = detector or CrisisDetector(config=self.config)
        self.flagger = flagger or ScoreFlagger(
            thresholds=self.config.thresholds,
            catalog=self.config.catalog,
        )
        self.presenter = InterventionPresenter(
            store=self.store,
            renderer=self.renderer,
            clock=clock,
        )
        self.scheduler = FollowUpScheduler(
            store=self.store,
            renderer=self.renderer,
            cooldown=self.config.follow_up_cooldown,
            clock=clock,
        )

    def with_renderer(self, renderer: InterventionRenderer) -> "SafetyPipeline":
        """Same detector, flagger and storage, rendering elsewhere."""
        return SafetyPipeline(
            config=self.config,
            store=self.store,
            renderer=renderer,
            clock=self._clock,
            detector=self.detector,
            flagger=self.flagger,
        )

    async def screen_text(
        self,
        session_id: str,
        text: Optional[str],
        locale: Optional[str] = None,
    ) -> TextScreeningResult:
        """
        Classify text and present an intervention if anything matched.

        Args:
            session_id: Session identifier
            text: User text (None or blank is no signal)
            locale: Client locale for crisis resources

        Returns:
            TextScreeningResult
        """
        start = time.perf_counter()

        result = self.detector.classify(text, locale)
        view = None
        if result is not None:
            view = await self.presenter.present(session_id, result)

        return TextScreeningResult(
            result=result,
            view=view,
            processing_time_ms=(time.perf_counter() - start) * 1000,
        )

    async def screen_scores(
        self,
        session_id: str,
        summary: Union[AssessmentScoreSummary, Mapping[str, Any], None],
    ) -> ScoreScreeningResult:
        """
        Flag assessment scores and present each flag in order.

        The session record ends up describing the last flag presented.

        Args:
            session_id: Session identifier
            summary: Score summary from the assessment engine

        Returns:
            ScoreScreeningResult
        """
        start = time.perf_counter()

        flags = self.flagger.flag_from_scores(summary)
        views = [await self.presenter.present(session_id, flag) for flag in flags]

        return ScoreScreeningResult(
            flags=flags,
            views=views,
            processing_time_ms=(time.perf_counter() - start) * 1000,
        )

    async def check_follow_up(self, session_id: str) -> Optional[FollowUpBanner]:
        """Show the follow-up banner if the session is due one."""
        return await self.scheduler.check_follow_up(session_id)

    async def end_session(self, session_id: str) -> bool:
        """Drop the session's intervention record."""
        return await self.store.clear(session_id)


# ==================================
# Singleton
# ==================================

_pipeline_instance: Optional[SafetyPipeline] = None


def get_safety_pipeline() -> SafetyPipeline:
    """
    Get or create the process-wide SafetyPipeline.

    Configuration is read from settings once, on first use.
    """
    global _pipeline_instance
    if _pipeline_instance is None:
        _pipeline_instance = SafetyPipeline(
            config=SafetyConfig.from_settings(settings),
            store=get_intervention_store(),
        )
        logger.info("SafetyPipeline initialized")
    return _pipeline_instance
