"""
Reports API Router
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError

from reportit.dependencies import get_actor, get_report_service
from reportit.exceptions import ForbiddenError, InvalidInputError
from reportit.schemas import (
    AssignReportRequest,
    ChangeStatusRequest,
    CommentRequest,
    ReportCreate,
    ReportResponse,
    ReportStatsResponse,
    UpdateResponse,
)
from reportit.services.actor import Actor
from reportit.services.photo_service import PhotoService
from reportit.services.report_service import ReportService

router = APIRouter()


@router.get("", response_model=list[ReportResponse])
async def list_reports(
    status: Optional[str] = None,
    category: Optional[str] = None,
    actor: Actor = Depends(get_actor),
    service: ReportService = Depends(get_report_service),
):
    """List reports: everything for admins, own reports for citizens"""
    reports = await service.list_reports(actor, status=status, category=category)
    return [ReportResponse.model_validate(r) for r in reports]


@router.get("/user", response_model=list[ReportResponse])
async def list_my_reports(
    actor: Actor = Depends(get_actor),
    service: ReportService = Depends(get_report_service),
):
    """Reports filed by the current user"""
    reports = await service.list_user_reports(actor)
    return [ReportResponse.model_validate(r) for r in reports]


@router.get("/stats", response_model=ReportStatsResponse)
async def report_stats(
    actor: Actor = Depends(get_actor),
    service: ReportService = Depends(get_report_service),
):
    """Report counts per status (admin only)"""
    by_status = await service.get_stats(actor)
    return ReportStatsResponse(total=sum(by_status.values()), by_status=by_status)


@router.post("", response_model=ReportResponse, status_code=201)
async def create_report(
    title: str = Form(...),
    description: str = Form(...),
    category: str = Form(...),
    address: str = Form(...),
    latitude: str = Form(...),
    longitude: str = Form(...),
    neighborhood: Optional[str] = Form(None),
    photos: Optional[List[UploadFile]] = File(None),
    actor: Actor = Depends(get_actor),
    service: ReportService = Depends(get_report_service),
):
    """File a new report, optionally with photos"""
    try:
        data = ReportCreate(
            title=title,
            description=description,
            category=category,
            address=address,
            neighborhood=neighborhood or None,
            latitude=latitude,
            longitude=longitude,
        )
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors())
        raise InvalidInputError(f"Invalid report data: {fields}") from exc

    photo_urls = await PhotoService().save_photos(photos or [])
    report = await service.create_report(actor, data, photo_urls)
    return ReportResponse.model_validate(report)


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(
    report_id: int,
    actor: Actor = Depends(get_actor),
    service: ReportService = Depends(get_report_service),
):
    """Get a single report (owner or admin)"""
    report = await service.get_report(actor, report_id)
    return ReportResponse.model_validate(report)


@router.patch("/{report_id}/status", response_model=ReportResponse)
async def change_status(
    report_id: int,
    request: ChangeStatusRequest,
    actor: Actor = Depends(get_actor),
    service: ReportService = Depends(get_report_service),
):
    """Change report status (admin only)"""
    report = await service.change_status(actor, report_id, request.status)
    return ReportResponse.model_validate(report)


@router.patch("/{report_id}/assign", response_model=ReportResponse)
async def assign_report(
    report_id: int,
    request: AssignReportRequest,
    actor: Actor = Depends(get_actor),
    service: ReportService = Depends(get_report_service),
):
    """Assign a report to a crew or department (admin only)"""
    report = await service.assign_report(actor, report_id, request.assigned_to)
    return ReportResponse.model_validate(report)


@router.post("/{report_id}/photos", response_model=ReportResponse)
async def add_photo(
    report_id: int,
    photo: UploadFile = File(...),
    actor: Actor = Depends(get_actor),
    service: ReportService = Depends(get_report_service),
):
    """Attach a photo to an existing report (admin only)"""
    # Check access before writing anything to disk
    await service.get_report(actor, report_id)
    if not actor.is_admin:
        raise ForbiddenError("Administrator rights required")
    urls = await PhotoService().save_photos([photo])
    if not urls:
        raise InvalidInputError("Photo file is required")
    report = await service.add_photo(actor, report_id, urls[0])
    return ReportResponse.model_validate(report)


@router.get("/{report_id}/updates", response_model=list[UpdateResponse])
async def get_updates(
    report_id: int,
    actor: Actor = Depends(get_actor),
    service: ReportService = Depends(get_report_service),
):
    """Update trail of a report, newest first (owner or admin)"""
    updates = await service.get_updates(actor, report_id)
    return [UpdateResponse.model_validate(u) for u in updates]


@router.post("/{report_id}/updates", response_model=UpdateResponse, status_code=201)
async def add_update(
    report_id: int,
    request: CommentRequest,
    actor: Actor = Depends(get_actor),
    service: ReportService = Depends(get_report_service),
):
    """Comment on a report (owner or admin)"""
    update = await service.add_comment(actor, report_id, request.content)
    return UpdateResponse.model_validate(update)
