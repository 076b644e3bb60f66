"""
Badge Service - Activity counters and achievement badges
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Iterable, List, Mapping

from reportit.badges import BADGE_DEFINITIONS, COUNTER_FIELDS, ActivityType
from reportit.models.user import User
from reportit.schemas import BadgeProgress, BadgeResponse
from reportit.storage.base import Storage

logger = logging.getLogger(__name__)


def user_counts(user: User) -> Dict[ActivityType, int]:
    """Activity counters of a user keyed by activity type"""
    return {
        activity: getattr(user, field) or 0
        for activity, field in COUNTER_FIELDS.items()
    }


def earned_badges(counts: Mapping[ActivityType, int], held: Iterable[str]) -> List[str]:
    """Ids of badges not in `held` whose threshold is met by `counts`"""
    held = set(held)
    return [
        badge.id
        for badge in BADGE_DEFINITIONS
        if badge.id not in held and counts.get(badge.criteria.type, 0) >= badge.criteria.count
    ]


class BadgeService:
    """Tracks user activity and grants badges.

    Granting is monotonic: badges are only ever added. Evaluation checks every
    definition against the current counters, so one activity can grant several
    badges at once and re-running it with unchanged counters grants nothing.
    """

    # Shared across instances; SQL-backed services are created per request.
    # A lock lives only while someone holds or waits for it.
    _locks: Dict[int, asyncio.Lock] = {}
    _lock_users: Dict[int, int] = {}

    def __init__(self, storage: Storage):
        self.storage = storage

    @asynccontextmanager
    async def _user_lock(self, user_id: int) -> AsyncIterator[None]:
        """Serialize counter updates for one user"""
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._lock_users[user_id] = self._lock_users.get(user_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[user_id] -= 1
            if not self._lock_users[user_id]:
                del self._lock_users[user_id]
                del self._locks[user_id]

    @staticmethod
    def evaluate(user: User) -> List[str]:
        """Badges the user qualifies for but does not hold yet"""
        return earned_badges(user_counts(user), user.badges or [])

    async def record_activity(self, user_id: int, activity: ActivityType) -> List[str]:
        """Increment one counter and grant any newly earned badges.

        Never raises: a missing user or a storage failure is logged and an
        empty list returned. Returns the ids of newly granted badges.
        """
        try:
            async with self._user_lock(user_id):
                user = await self.storage.get_user(user_id)
                if not user:
                    logger.warning(
                        "Activity %s ignored: user %s not found", activity.value, user_id
                    )
                    return []

                counts = user_counts(user)
                counts[activity] += 1
                return await self._save(user, counts)
        except Exception:
            logger.exception(
                "Failed to record %s activity for user %s", activity.value, user_id
            )
            return []

    async def check_and_award(self, user_id: int) -> List[str]:
        """Re-evaluate badges without touching the counters"""
        try:
            async with self._user_lock(user_id):
                user = await self.storage.get_user(user_id)
                if not user:
                    logger.warning("Badge check skipped: user %s not found", user_id)
                    return []

                if not self.evaluate(user):
                    return []
                return await self._save(user, user_counts(user))
        except Exception:
            logger.exception("Failed to check badges for user %s", user_id)
            return []

    async def _save(self, user: User, counts: Dict[ActivityType, int]) -> List[str]:
        held = list(user.badges or [])
        new_badges = earned_badges(counts, held)

        await self.storage.update_user_progress(
            user.id,
            report_count=counts[ActivityType.REPORTS],
            update_count=counts[ActivityType.UPDATES],
            completed_count=counts[ActivityType.COMPLETED],
            badges=held + new_badges,
        )

        if new_badges:
            logger.info("User %s earned badges: %s", user.id, ", ".join(new_badges))
        return new_badges

    @staticmethod
    def get_progress(user: User) -> List[BadgeProgress]:
        """Progress towards every badge, in definition order"""
        counts = user_counts(user)
        held = set(user.badges or [])
        return [
            BadgeProgress(
                badge=BadgeResponse.model_validate(badge),
                type=badge.criteria.type,
                current=counts[badge.criteria.type],
                required=badge.criteria.count,
                earned=badge.id in held,
            )
            for badge in BADGE_DEFINITIONS
        ]
