"""
Relational storage backing on an async SQLAlchemy session
"""
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from reportit.badges import ActivityType
from reportit.models import Category, Report, ReportStatus, Update, User
from reportit.schemas import ReportCreate, UpdateCreate, UserCreate
from reportit.storage.base import SUBMITTED_CONTENT, Storage, utcnow


class SqlStorage(Storage):
    """Store backed by the users, reports and updates tables"""

    def __init__(self, db: AsyncSession):
        super().__init__()
        self.db = db

    # ---- Users ----

    async def _load_user(self, user_id: int, for_update: bool = False) -> Optional[User]:
        # Overwrite any copy already in the identity map with the stored row
        query = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self._load_user(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create_user(self, data: UserCreate) -> User:
        user = User(
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
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def get_all_users(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def update_user_progress(
        self,
        user_id: int,
        *,
        report_count: int,
        update_count: int,
        completed_count: int,
        badges: List[str],
    ) -> Optional[User]:
        user = await self._load_user(user_id, for_update=True)
        if not user:
            return None

        # Counters and badges never shrink, even against a stale caller
        user.report_count = max(user.report_count, report_count)
        user.update_count = max(user.update_count, update_count)
        user.completed_count = max(user.completed_count, completed_count)
        held = list(user.badges or [])
        # New list object so the JSON column is flagged dirty
        user.badges = held + [badge for badge in badges if badge not in held]

        await self.db.commit()
        await self.db.refresh(user)
        return user

    # ---- Reports ----

    async def create_report(self, data: ReportCreate, user_id: int) -> Report:
        now = utcnow()
        report = Report(
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
        self.db.add(report)
        # Flush for the id, then commit report and initial update together
        await self.db.flush()

        self.db.add(
            Update(
                report_id=report.id,
                user_id=user_id,
                content=SUBMITTED_CONTENT,
                created_at=now,
            )
        )
        await self.db.commit()
        await self.db.refresh(report)

        await self._signal(user_id, ActivityType.REPORTS)
        return report

    async def get_report(self, report_id: int) -> Optional[Report]:
        return await self.db.get(Report, report_id)

    async def get_reports_by_user(self, user_id: int) -> List[Report]:
        result = await self.db.execute(select(Report).where(Report.user_id == user_id))
        return list(result.scalars().all())

    async def get_all_reports(self) -> List[Report]:
        result = await self.db.execute(select(Report))
        return list(result.scalars().all())

    async def get_reports(
        self,
        status: Optional[ReportStatus] = None,
        category: Optional[Category] = None,
        user_id: Optional[int] = None,
    ) -> List[Report]:
        query = select(Report)

        # Apply filters
        if status:
            query = query.where(Report.status == status)
        if category:
            query = query.where(Report.category == category)
        if user_id is not None:
            query = query.where(Report.user_id == user_id)

        query = query.order_by(Report.created_at.desc(), Report.id.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count_reports_by_status(self) -> Dict[str, int]:
        result = await self.db.execute(
            select(Report.status, func.count(Report.id)).group_by(Report.status)
        )
        counts = {status.value: 0 for status in ReportStatus}
        for status, count in result.all():
            counts[ReportStatus(status).value] = count
        return counts

    async def update_report_status(
        self, report_id: int, status: ReportStatus
    ) -> Optional[Report]:
        report = await self.db.get(Report, report_id)
        if not report:
            return None

        previous = report.status
        report.status = status
        await self.db.commit()
        await self.db.refresh(report)

        if status == ReportStatus.COMPLETED and previous != ReportStatus.COMPLETED:
            await self._signal(report.user_id, ActivityType.COMPLETED)
        return report

    async def update_report_assignment(
        self, report_id: int, assigned_to: str
    ) -> Optional[Report]:
        report = await self.db.get(Report, report_id)
        if not report:
            return None

        report.assigned_to = assigned_to
        await self.db.commit()
        await self.db.refresh(report)
        return report

    async def add_photo_to_report(self, report_id: int, photo_url: str) -> None:
        report = await self.db.get(Report, report_id)
        if not report:
            return

        report.photos = [*(report.photos or []), photo_url]
        await self.db.commit()

    # ---- Updates ----

    async def create_update(self, data: UpdateCreate) -> Update:
        update = Update(
            report_id=data.report_id,
            user_id=data.user_id,
            content=data.content,
            created_at=utcnow(),
        )
        self.db.add(update)
        await self.db.commit()
        await self.db.refresh(update)

        await self._signal(data.user_id, ActivityType.UPDATES)
        return update

    async def get_updates_by_report_id(self, report_id: int) -> List[Update]:
        query = (
            select(Update)
            .where(Update.report_id == report_id)
            .order_by(Update.created_at.desc(), Update.id.desc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
