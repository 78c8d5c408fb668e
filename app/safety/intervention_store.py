"""Session-scoped storage for the most recent intervention record."""

import logging
from typing import Optional

from pydantic import ValidationError
from redis.exceptions import RedisError

from app.config import settings
from app.infra.redis import get_redis, APP_PREFIX
from app.safety.models import InterventionRecord

logger = logging.getLogger(__name__)

# Fixed cell name; owned by the safety layer only.
INTERVENTION_KEY = "intervention_log"
SESSION_PREFIX = f"{APP_PREFIX}session:"


class InterventionStore:
    """
    Holds one InterventionRecord per session.

    Key pattern: assessment-safety:v1:session:{session_id}:intervention_log

    Writes overwrite (last intervention wins). The key expires with the
    session TTL. Gracefully handles Redis unavailability with in-memory
    fallback.
    """

    def __init__(self, ttl: Optional[int] = None):
        """Initialize intervention store."""
        self._ttl = ttl or settings.redis_session_ttl
        self._in_memory_fallback: dict[str, str] = {}

    def _key(self, session_id: str) -> str:
        """Generate Redis key."""
        return f"{SESSION_PREFIX}{session_id}:{INTERVENTION_KEY}"

    async def save(self, session_id: str, record: InterventionRecord) -> bool:
        """
        Store the record for a session, replacing any previous one.

        Args:
            session_id: Session identifier
            record: Intervention that was just shown

        Returns:
            True once stored (in Redis or the fallback)
        """
        payload = record.to_json()
        redis = await get_redis()

        if redis:
            try:
                await redis.setex(self._key(session_id), self._ttl, payload)
                self._in_memory_fallback.pop(session_id, None)
                logger.debug(f"Intervention record saved: {session_id}")
                return True
            except RedisError as e:
                logger.error(f"Failed to save intervention record {session_id}: {e}")

        self._in_memory_fallback[session_id] = payload
        logger.warning(
            f"Redis unavailable, using in-memory fallback for session {session_id}"
        )
        return True

    async def load(self, session_id: str) -> Optional[InterventionRecord]:
        """
        Read the record for a session.

        Args:
            session_id: Session identifier

        Returns:
            InterventionRecord, or None if absent or unreadable
        """
        # Fallback entries exist only while the latest save has missed Redis.
        raw: Optional[str] = self._in_memory_fallback.get(session_id)
        redis = await get_redis() if raw is None else None

        if redis:
            try:
                raw = await redis.get(self._key(session_id))
            except RedisError as e:
                logger.error(f"Failed to load intervention record {session_id}: {e}")

        if raw is None:
            return None

        try:
            return InterventionRecord.from_json(raw)
        except ValidationError:
            logger.warning(f"Discarding unreadable intervention record for {session_id}")
            return None

    async def clear(self, session_id: str) -> bool:
        """
        Remove the record when the session ends.

        Args:
            session_id: Session identifier

        Returns:
            True if a record was removed
        """
        removed = self._in_memory_fallback.pop(session_id, None) is not None
        redis = await get_redis()

        if redis:
            try:
                deleted = await redis.delete(self._key(session_id))
                removed = removed or bool(deleted)
            except RedisError as e:
                logger.error(f"Failed to clear intervention record {session_id}: {e}")

        if removed:
            logger.debug(f"Intervention record cleared: {session_id}")
        return removed


# Singleton
_store: Optional[InterventionStore] = None


def get_intervention_store() -> InterventionStore:
    """Get singleton InterventionStore."""
    global _store
    if _store is None:
        _store = InterventionStore()
    return _store
