"""Delayed re-engagement after an intervention."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from app.safety.intervention_store import InterventionStore
from app.safety.models import FollowUpBanner
from app.safety.rendering import InterventionRenderer

logger = logging.getLogger(__name__)

FOLLOW_UP_MESSAGE = "How are you feeling? Remember, support is always available."
FOLLOW_UP_DISMISS = "I'm OK"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FollowUpScheduler:
    """
    Shows a check-in banner once an intervention's cooldown has passed.

    The stored record is only read, never updated, so every check made
    after the cooldown shows the banner again.
    """

    def __init__(
        self,
        store: InterventionStore,
        renderer: InterventionRenderer,
        cooldown: timedelta = timedelta(minutes=10),
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.renderer = renderer
        self.cooldown = cooldown
        self._clock = clock or _utcnow

    async def check_follow_up(self, session_id: str) -> Optional[FollowUpBanner]:
        """
        Render the follow-up banner if the session is due one.

        Args:
            session_id: Session to check

        Returns:
            The rendered banner, or None when there is nothing to show
        """
        record = await self.store.load(session_id)
        if record is None or not record.shown:
            return None

        elapsed = self._clock() - record.timestamp
        if elapsed <= self.cooldown:
            return None

        banner = FollowUpBanner(message=FOLLOW_UP_MESSAGE, dismiss_label=FOLLOW_UP_DISMISS)
        self.renderer.render_banner(banner)
        logger.info(
            f"Follow-up shown: session={session_id}, category={record.category}, "
            f"elapsed={int(elapsed.total_seconds())}s"
        )
        return banner
