"""
Pydantic schemas for API validation
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from reportit.badges import ActivityType, BadgeCriteria
from reportit.models.report import Category, ReportStatus
from reportit.models.user import Role


# ============ User Schemas ============

class UserCreate(BaseModel):
    """Schema for registering a user (password already hashed by the caller)"""
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: Role = Role.USER


class RegisterRequest(BaseModel):
    """Schema for the public registration endpoint"""
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr


class UserResponse(BaseModel):
    """Schema for user response"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: str
    email: str
    role: Role
    report_count: int
    update_count: int
    completed_count: int
    badges: List[str]
    created_at: datetime


class TokenResponse(BaseModel):
    """Schema for login response"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# ============ Report Schemas ============

class ReportCreate(BaseModel):
    """Schema for creating a report. Owner and status are never taken from input."""
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: Category
    address: str = Field(..., min_length=1, max_length=500)
    neighborhood: Optional[str] = Field(None, max_length=255)
    latitude: str = Field(..., min_length=1, max_length=32)
    longitude: str = Field(..., min_length=1, max_length=32)


class ReportResponse(BaseModel):
    """Schema for report response"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    category: Category
    address: str
    neighborhood: Optional[str]
    latitude: str
    longitude: str
    status: ReportStatus
    user_id: int
    assigned_to: Optional[str]
    photos: List[str]
    created_at: datetime


class ReportStatsResponse(BaseModel):
    """Schema for admin dashboard counters"""
    total: int
    by_status: Dict[str, int]


# ============ Update Schemas ============

class UpdateCreate(BaseModel):
    """Schema for storing an update on a report"""
    report_id: int
    user_id: int
    content: str = Field(..., min_length=1)


class UpdateResponse(BaseModel):
    """Schema for update response"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    report_id: int
    user_id: int
    content: str
    created_at: datetime


# ============ Action Schemas ============

class ChangeStatusRequest(BaseModel):
    """Schema for changing report status"""
    status: Optional[str] = None


class AssignReportRequest(BaseModel):
    """Schema for assigning a report"""
    assigned_to: str = ""


class CommentRequest(BaseModel):
    """Schema for posting a comment on a report"""
    content: str = ""


# ============ Badge Schemas ============

class BadgeResponse(BaseModel):
    """Schema for a badge definition"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    icon: str
    level: int
    criteria: BadgeCriteria


class BadgeProgress(BaseModel):
    """Progress of one user towards one badge"""
    badge: BadgeResponse
    type: ActivityType
    current: int
    required: int
    earned: bool
