"""
Intervention presentation.

Builds the interruption surface for a crisis result or assessment flag,
hands it to a renderer, and records in session storage that it was shown.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from app.safety.intervention_store import InterventionStore
from app.safety.models import (
    ActionView,
    Affordance,
    AssessmentFlag,
    CrisisResources,
    CrisisResult,
    InterventionRecord,
    InterventionView,
    Resource,
    ResourceView,
)
from app.safety.rendering import InterventionRenderer

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Presentable = Union[CrisisResult, AssessmentFlag]

INTERVENTION_TITLE = "We're Here to Help"

INTERVENTION_ACTIONS: tuple[ActionView, ...] = (
    ActionView(id="seek_help", label="I'll Get Help"),
    ActionView(id="continue", label="Continue Assessment"),
)


def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def _crisis_entry(resource: Resource) -> ResourceView:
    """Contact-first rendering: phone, text line, email, website."""
    affordances: list[Affordance] = []
    if resource.phone:
        affordances.append(Affordance(
            kind="phone",
            label=resource.phone,
            href=f"tel:{resource.phone.replace(' ', '')}",
        ))
    if resource.text:
        affordances.append(Affordance(kind="text", label=resource.text))
    if resource.email:
        affordances.append(Affordance(
            kind="email",
            label=resource.email,
            href=f"mailto:{resource.email}",
        ))
    if resource.web:
        affordances.append(Affordance(kind="web", label="Website", href=resource.web))
    return ResourceView(name=resource.name, affordances=affordances)


def _support_entry(resource: Resource) -> ResourceView:
    """Informational rendering: description and a learn-more link."""
    affordances: list[Affordance] = []
    if resource.web:
        affordances.append(Affordance(kind="web", label="Learn More", href=resource.web))
    return ResourceView(
        name=resource.name,
        description=resource.description,
        affordances=affordances,
        items=list(resource.items),
    )


def build_intervention_view(result: Presentable) -> InterventionView:
    """
    Turn a crisis result or flag into a renderer-independent view.

    Crisis bundles show contact affordances; grouped bundles show
    descriptions and links. Fields a resource lacks produce nothing.
    """
    bundle = result.resources

    if isinstance(bundle, CrisisResources):
        variant = "crisis"
        resources = [_crisis_entry(entry) for entry in bundle.immediate]
    else:
        variant = "support"
        resources = [_support_entry(entry) for entry in bundle.entries.values()]

    message = result.message if isinstance(result, AssessmentFlag) else bundle.message

    return InterventionView(
        variant=variant,
        title=INTERVENTION_TITLE,
        message=message,
        priority=bundle.priority,
        category=result.category,
        action=result.action_name,
        resources=resources,
        actions=list(INTERVENTION_ACTIONS),
    )


class InterventionPresenter:
    """
    Shows interventions and records them for the follow-up check.

    Usage:
        presenter = InterventionPresenter(store, renderer)
        view = await presenter.present(session_id, result)
    """

    def __init__(
        self,
        store: InterventionStore,
        renderer: InterventionRenderer,
        clock: Optional[Clock] = None,
    ):
        self.store = store
        self.renderer = renderer
        self._clock = clock or _utcnow

    async def present(self, session_id: str, result: Presentable) -> InterventionView:
        """
        Render the intervention and overwrite the session's record.

        Args:
            session_id: Session the intervention belongs to
            result: Crisis result or assessment flag to present

        Returns:
            The view that was rendered
        """
        view = build_intervention_view(result)
        self.renderer.render_intervention(view)

        record = InterventionRecord(
            timestamp=self._clock(),
            category=result.category,
            action=result.action_name,
            shown=True,
        )
        await self.store.save(session_id, record)

        logger.info(
            f"Intervention shown: session={session_id}, "
            f"category={record.category}, action={record.action}"
        )
        return view
