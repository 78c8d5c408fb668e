"""
Safety API Endpoints.

Screens assessment free text and score summaries, returns the
intervention to show (if any), and serves the follow-up check.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from pydantic import BaseModel, Field

from app.safety.models import (
    AssessmentFlag,
    AssessmentScoreSummary,
    FollowUpBanner,
    InterventionView,
)
from app.safety.pipeline import SafetyPipeline, get_safety_pipeline
from app.safety.rendering import CollectingRenderer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/safety", tags=["Safety"])


class TextScreenRequest(BaseModel):
    """Free text to screen."""

    text: Optional[str] = Field(
        default=None,
        description="User-authored text from any assessment input, screened in full",
        examples=["Lately everything feels hopeless and I feel trapped"],
    )


class TextScreenResponse(BaseModel):
    """Outcome of text screening."""

    level: Optional[str] = Field(default=None, description="Matched severity tier")
    action: Optional[str] = Field(default=None, description="Response the tier calls for")
    matched_count: int = Field(default=0, description="Number of lexicon phrases matched")
    intervention: Optional[InterventionView] = Field(
        default=None,
        description="Intervention surface to render, null when nothing matched",
    )
    processing_time_ms: float = 0.0


class FlagSummary(BaseModel):
    """Assessment flag without its resource payload."""

    type: str
    confidence: Optional[float] = None
    severity: Optional[str] = None
    message: str

    @classmethod
    def from_flag(cls, flag: AssessmentFlag) -> "FlagSummary":
        return cls(
            type=flag.type,
            confidence=flag.confidence,
            severity=flag.severity,
            message=flag.message,
        )


class ScoreScreenResponse(BaseModel):
    """Outcome of score screening."""

    flags: list[FlagSummary] = Field(default_factory=list)
    interventions: list[InterventionView] = Field(default_factory=list)
    processing_time_ms: float = 0.0


class FollowUpResponse(BaseModel):
    """Follow-up check result."""

    banner: Optional[FollowUpBanner] = None


@router.post(
    "/screen/text",
    response_model=TextScreenResponse,
    status_code=status.HTTP_200_OK,
    summary="Screen free text for crisis language",
)
async def screen_text(
    request: TextScreenRequest,
    x_session_id: str = Header(
        ...,
        alias="X-Session-ID",
        min_length=1,
        description="Browser session identifier",
    ),
    accept_language: Optional[str] = Header(default=None, alias="Accept-Language"),
    pipeline: SafetyPipeline = Depends(get_safety_pipeline),
) -> TextScreenResponse:
    """
    Classify text and return the intervention to show.

    The session's intervention record is overwritten when an
    intervention is returned.
    """
    renderer = CollectingRenderer()
    screened = await pipeline.with_renderer(renderer).screen_text(
        session_id=x_session_id,
        text=request.text,
        locale=accept_language,
    )

    result = screened.result
    return TextScreenResponse(
        level=result.level.value if result else None,
        action=result.action.value if result else None,
        matched_count=len(result.matched_phrases) if result else 0,
        intervention=renderer.interventions[-1] if renderer.interventions else None,
        processing_time_ms=screened.processing_time_ms,
    )


@router.post(
    "/screen/scores",
    response_model=ScoreScreenResponse,
    status_code=status.HTTP_200_OK,
    summary="Screen a completed assessment's scores",
)
async def screen_scores(
    summary: AssessmentScoreSummary,
    x_session_id: str = Header(
        ...,
        alias="X-Session-ID",
        min_length=1,
        description="Browser session identifier",
    ),
    pipeline: SafetyPipeline = Depends(get_safety_pipeline),
) -> ScoreScreenResponse:
    """Return one flag and intervention per crossed threshold."""
    renderer = CollectingRenderer()
    screened = await pipeline.with_renderer(renderer).screen_scores(
        session_id=x_session_id,
        summary=summary,
    )

    return ScoreScreenResponse(
        flags=[FlagSummary.from_flag(flag) for flag in screened.flags],
        interventions=renderer.interventions,
        processing_time_ms=screened.processing_time_ms,
    )


@router.get(
    "/follow-up",
    response_model=FollowUpResponse,
    summary="Check whether a follow-up banner is due",
)
async def follow_up(
    x_session_id: str = Header(
        ...,
        alias="X-Session-ID",
        min_length=1,
        description="Browser session identifier",
    ),
    pipeline: SafetyPipeline = Depends(get_safety_pipeline),
) -> FollowUpResponse:
    """Called on page views after an intervention."""
    renderer = CollectingRenderer()
    await pipeline.with_renderer(renderer).check_follow_up(x_session_id)
    return FollowUpResponse(banner=renderer.banners[-1] if renderer.banners else None)


@router.delete(
    "/session/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="End a session",
    description="Clear the session's intervention record.",
)
async def end_session(
    session_id: str,
    pipeline: SafetyPipeline = Depends(get_safety_pipeline),
) -> None:
    """Clear session-scoped safety data."""
    await pipeline.end_session(session_id)
