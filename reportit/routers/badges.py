"""
Badges API Router
"""
from fastapi import APIRouter, Depends

from reportit.badges import BADGE_DEFINITIONS
from reportit.dependencies import get_current_user
from reportit.models.user import User
from reportit.schemas import BadgeProgress, BadgeResponse
from reportit.services.badge_service import BadgeService

router = APIRouter()


@router.get("", response_model=list[BadgeResponse])
async def list_badges():
    """All badge definitions"""
    return [BadgeResponse.model_validate(badge) for badge in BADGE_DEFINITIONS]


@router.get("/progress", response_model=list[BadgeProgress])
async def badge_progress(user: User = Depends(get_current_user)):
    """Current user's progress towards every badge"""
    return BadgeService.get_progress(user)
