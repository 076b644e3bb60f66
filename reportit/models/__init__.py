"""
Database models
"""
from reportit.models.user import User, Role
from reportit.models.report import Report, ReportStatus, Category
from reportit.models.update import Update

__all__ = [
    "User",
    "Role",
    "Report",
    "ReportStatus",
    "Category",
    "Update",
]
