"""
Storage contract shared by the in-memory and SQL backings
"""
import abc
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Tuple

from reportit.badges import ActivityType
from reportit.models import Category, Report, ReportStatus, Update, User
from reportit.schemas import ReportCreate, UpdateCreate, UserCreate

logger = logging.getLogger(__name__)

ActivityListener = Callable[[int, ActivityType], Awaitable[Any]]

SUBMITTED_CONTENT = "Report submitted"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Storage(abc.ABC):
    """Persistence for users, reports and updates.

    Every activity-producing write (new report, new update, transition into
    completed) is announced to the registered activity listeners. Listener
    delivery never raises: failures are logged and dropped, so a broken
    listener cannot undo or fail the write that triggered it.
    """

    def __init__(self) -> None:
        self._listeners: List[ActivityListener] = []
        self._deferred: Optional[List[Tuple[int, ActivityType]]] = None

    def add_activity_listener(self, listener: ActivityListener) -> None:
        self._listeners.append(listener)

    async def _signal(self, user_id: int, activity: ActivityType) -> None:
        """Announce an activity, or queue it inside deferred_signals()"""
        if self._deferred is not None:
            self._deferred.append((user_id, activity))
            return
        await self._dispatch(user_id, activity)

    async def _dispatch(self, user_id: int, activity: ActivityType) -> None:
        for listener in list(self._listeners):
            try:
                await listener(user_id, activity)
            except Exception:
                logger.exception(
                    "Activity listener failed for user %s (%s)", user_id, activity.value
                )

    @asynccontextmanager
    async def deferred_signals(self) -> AsyncIterator[None]:
        """Hold back activity signals until the block exits.

        Signals are delivered in the order they were raised, even if the
        block fails after a write has already been committed.
        """
        if self._deferred is not None:
            yield
            return

        self._deferred = []
        try:
            yield
        finally:
            pending, self._deferred = self._deferred, None
            for user_id, activity in pending:
                await self._dispatch(user_id, activity)

    # ---- Users ----

    @abc.abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]: ...

    @abc.abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abc.abstractmethod
    async def create_user(self, data: UserCreate) -> User: ...

    @abc.abstractmethod
    async def get_all_users(self) -> List[User]: ...

    @abc.abstractmethod
    async def update_user_progress(
        self,
        user_id: int,
        *,
        report_count: int,
        update_count: int,
        completed_count: int,
        badges: List[str],
    ) -> Optional[User]:
        """Write counters and badge list in a single update.

        Neither shrinks: counters keep the larger value and badges already
        stored stay, with new ones appended.
        """

    # ---- Reports ----

    @abc.abstractmethod
    async def create_report(self, data: ReportCreate, user_id: int) -> Report:
        """Create a pending report together with its "Report submitted" update"""

    @abc.abstractmethod
    async def get_report(self, report_id: int) -> Optional[Report]: ...

    @abc.abstractmethod
    async def get_reports_by_user(self, user_id: int) -> List[Report]: ...

    @abc.abstractmethod
    async def get_all_reports(self) -> List[Report]: ...

    @abc.abstractmethod
    async def get_reports(
        self,
        status: Optional[ReportStatus] = None,
        category: Optional[Category] = None,
        user_id: Optional[int] = None,
    ) -> List[Report]:
        """Filtered read, newest first"""

    @abc.abstractmethod
    async def count_reports_by_status(self) -> Dict[str, int]: ...

    @abc.abstractmethod
    async def update_report_status(
        self, report_id: int, status: ReportStatus
    ) -> Optional[Report]: ...

    @abc.abstractmethod
    async def update_report_assignment(
        self, report_id: int, assigned_to: str
    ) -> Optional[Report]: ...

    @abc.abstractmethod
    async def add_photo_to_report(self, report_id: int, photo_url: str) -> None: ...

    # ---- Updates ----

    @abc.abstractmethod
    async def create_update(self, data: UpdateCreate) -> Update: ...

    @abc.abstractmethod
    async def get_updates_by_report_id(self, report_id: int) -> List[Update]:
        """Updates for a report, newest first"""
