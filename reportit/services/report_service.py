"""
Report Service - Access policy and workflow for civic issue reports
"""
import logging
from typing import Dict, Iterable, List, Optional

from reportit.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from reportit.models.report import Category, Report, ReportStatus
from reportit.models.update import Update
from reportit.schemas import ReportCreate, UpdateCreate
from reportit.services.actor import Actor
from reportit.storage.base import Storage

logger = logging.getLogger(__name__)


def parse_status(value) -> ReportStatus:
    """Strictly map a wire value to a ReportStatus"""
    try:
        return ReportStatus(value)
    except ValueError:
        raise InvalidInputError("Invalid status value") from None


def parse_category(value) -> Category:
    """Strictly map a wire value to a Category"""
    try:
        return Category(value)
    except ValueError:
        raise InvalidInputError("Invalid category value") from None


class ReportService:
    """Report lifecycle operations on top of a storage backing.

    Status changes are unrestricted between states; any status can follow
    any other. Derived updates are written after the report change commits,
    and badge bookkeeping only runs once both are stored.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    async def _get_visible_report(self, actor: Actor, report_id: int) -> Report:
        report = await self.storage.get_report(report_id)
        if not report:
            raise NotFoundError("Report not found")
        if not actor.can_view(report):
            raise ForbiddenError("Access denied")
        return report

    @staticmethod
    def _require_admin(actor: Actor) -> None:
        if not actor.is_admin:
            raise ForbiddenError("Administrator rights required")

    async def create_report(
        self,
        actor: Actor,
        data: ReportCreate,
        photo_urls: Iterable[str] = (),
    ) -> Report:
        """File a new report owned by the acting user"""
        report = await self.storage.create_report(data, user_id=actor.user_id)

        photo_urls = list(photo_urls)
        for url in photo_urls:
            await self.storage.add_photo_to_report(report.id, url)

        logger.info(
            "Report %s created by user %s (%s, %d photos)",
            report.id, actor.user_id, report.category.value, len(photo_urls),
        )

        if photo_urls:
            report = await self.storage.get_report(report.id)
        return report

    async def list_reports(
        self,
        actor: Actor,
        status: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Report]:
        """All reports for administrators, own reports for citizens"""
        return await self.storage.get_reports(
            status=parse_status(status) if status else None,
            category=parse_category(category) if category else None,
            user_id=None if actor.is_admin else actor.user_id,
        )

    async def list_user_reports(self, actor: Actor) -> List[Report]:
        return await self.storage.get_reports_by_user(actor.user_id)

    async def get_report(self, actor: Actor, report_id: int) -> Report:
        return await self._get_visible_report(actor, report_id)

    async def get_updates(self, actor: Actor, report_id: int) -> List[Update]:
        """Update trail of a report, newest first"""
        await self._get_visible_report(actor, report_id)
        return await self.storage.get_updates_by_report_id(report_id)

    async def add_comment(self, actor: Actor, report_id: int, content: Optional[str]) -> Update:
        """Post a comment as the report owner or an administrator"""
        await self._get_visible_report(actor, report_id)

        content = (content or "").strip()
        if not content:
            raise InvalidInputError("Update content is required")

        return await self.storage.create_update(
            UpdateCreate(report_id=report_id, user_id=actor.user_id, content=content)
        )

    async def change_status(self, actor: Actor, report_id: int, status) -> Report:
        """Set a report's status and note the change in its trail"""
        self._require_admin(actor)
        new_status = parse_status(status)

        async with self.storage.deferred_signals():
            report = await self.storage.update_report_status(report_id, new_status)
            if not report:
                raise NotFoundError("Report not found")

            await self.storage.create_update(
                UpdateCreate(
                    report_id=report_id,
                    user_id=actor.user_id,
                    content=f"Status updated to {new_status.value}",
                )
            )

        logger.info(
            "Report %s status set to %s by admin %s",
            report_id, new_status.value, actor.user_id,
        )
        return report

    async def assign_report(self, actor: Actor, report_id: int, assigned_to: Optional[str]) -> Report:
        """Assign a report to a crew or department"""
        self._require_admin(actor)

        assigned_to = (assigned_to or "").strip()
        if not assigned_to:
            raise InvalidInputError("Assignment information required")

        async with self.storage.deferred_signals():
            report = await self.storage.update_report_assignment(report_id, assigned_to)
            if not report:
                raise NotFoundError("Report not found")

            await self.storage.create_update(
                UpdateCreate(
                    report_id=report_id,
                    user_id=actor.user_id,
                    content=f"Issue assigned to {assigned_to}",
                )
            )

        logger.info("Report %s assigned to %s by admin %s", report_id, assigned_to, actor.user_id)
        return report

    async def add_photo(self, actor: Actor, report_id: int, photo_url: str) -> Report:
        """Attach another photo to an existing report"""
        self._require_admin(actor)

        report = await self.storage.get_report(report_id)
        if not report:
            raise NotFoundError("Report not found")

        await self.storage.add_photo_to_report(report_id, photo_url)
        return await self.storage.get_report(report_id)

    async def get_stats(self, actor: Actor) -> Dict[str, int]:
        """Report counts per status for the admin dashboard"""
        self._require_admin(actor)
        return await self.storage.count_reports_by_status()
