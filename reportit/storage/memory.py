"""
In-memory storage backing, used by tests and the "memory" backend
"""
import itertools
from typing import Dict, List, Optional

from reportit.badges import ActivityType
from reportit.models import Category, Report, ReportStatus, Update, User
from reportit.schemas import ReportCreate, UpdateCreate, UserCreate
from reportit.storage.base import SUBMITTED_CONTENT, Storage, utcnow


def _newest_first(items):
    return sorted(items, key=lambda item: (item.created_at, item.id), reverse=True)


class MemStorage(Storage):
    """Dict-backed store with per-entity integer id counters"""

    def __init__(self) -> None:
        super().__init__()
        self._users: Dict[int, User] = {}
        self._reports: Dict[int, Report] = {}
        self._updates: Dict[int, Update] = {}
        self._user_ids = itertools.count(1)
        self._report_ids = itertools.count(1)
        self._update_ids = itertools.count(1)

    # ---- Users ----

    async def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def create_user(self, data: UserCreate) -> User:
        user = User(
            id=next(self._user_ids),
            username=data.username,
            password=data.password,
            name=data.name,
            email=data.email,
            role=data.role,
            report_count=0,
            update_count=0,
            completed_count=0,
            badges=[],
            created_at=utcnow(),
        )
        self._users[user.id] = user
        return user

    async def get_all_users(self) -> List[User]:
        return list(self._users.values())

    async def update_user_progress(
        self,
        user_id: int,
        *,
        report_count: int,
        update_count: int,
        completed_count: int,
        badges: List[str],
    ) -> Optional[User]:
        user = self._users.get(user_id)
        if not user:
            return None

        user.report_count = max(user.report_count, report_count)
        user.update_count = max(user.update_count, update_count)
        user.completed_count = max(user.completed_count, completed_count)
        held = list(user.badges or [])
        user.badges = held + [badge for badge in badges if badge not in held]
        return user

    # ---- Reports ----

    async def create_report(self, data: ReportCreate, user_id: int) -> Report:
        now = utcnow()
        report = Report(
            id=next(self._report_ids),
            title=data.title,
            description=data.description,
            category=data.category,
            address=data.address,
            neighborhood=data.neighborhood,
            latitude=data.latitude,
            longitude=data.longitude,
            status=ReportStatus.PENDING,
            user_id=user_id,
            assigned_to=None,
            photos=[],
            created_at=now,
        )
        submitted = Update(
            id=next(self._update_ids),
            report_id=report.id,
            user_id=user_id,
            content=SUBMITTED_CONTENT,
            created_at=now,
        )
        self._reports[report.id] = report
        self._updates[submitted.id] = submitted

        await self._signal(user_id, ActivityType.REPORTS)
        return report

    async def get_report(self, report_id: int) -> Optional[Report]:
        return self._reports.get(report_id)

    async def get_reports_by_user(self, user_id: int) -> List[Report]:
        return [r for r in self._reports.values() if r.user_id == user_id]

    async def get_all_reports(self) -> List[Report]:
        return list(self._reports.values())

    async def get_reports(
        self,
        status: Optional[ReportStatus] = None,
        category: Optional[Category] = None,
        user_id: Optional[int] = None,
    ) -> List[Report]:
        reports = self._reports.values()
        if status:
            reports = [r for r in reports if r.status == status]
        if category:
            reports = [r for r in reports if r.category == category]
        if user_id is not None:
            reports = [r for r in reports if r.user_id == user_id]
        return _newest_first(reports)

    async def count_reports_by_status(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in ReportStatus}
        for report in self._reports.values():
            counts[report.status.value] += 1
        return counts

    async def update_report_status(
        self, report_id: int, status: ReportStatus
    ) -> Optional[Report]:
        report = self._reports.get(report_id)
        if not report:
            return None

        previous = report.status
        report.status = status

        if status == ReportStatus.COMPLETED and previous != ReportStatus.COMPLETED:
            await self._signal(report.user_id, ActivityType.COMPLETED)
        return report

    async def update_report_assignment(
        self, report_id: int, assigned_to: str
    ) -> Optional[Report]:
        report = self._reports.get(report_id)
        if not report:
            return None

        report.assigned_to = assigned_to
        return report

    async def add_photo_to_report(self, report_id: int, photo_url: str) -> None:
        report = self._reports.get(report_id)
        if not report:
            return
        report.photos = [*report.photos, photo_url]

    # ---- Updates ----

    async def create_update(self, data: UpdateCreate) -> Update:
        update = Update(
            id=next(self._update_ids),
            report_id=data.report_id,
            user_id=data.user_id,
            content=data.content,
            created_at=utcnow(),
        )
        self._updates[update.id] = update

        await self._signal(data.user_id, ActivityType.UPDATES)
        return update

    async def get_updates_by_report_id(self, report_id: int) -> List[Update]:
        return _newest_first(u for u in self._updates.values() if u.report_id == report_id)
