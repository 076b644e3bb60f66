"""
Services package
"""
from reportit.services.actor import Actor
from reportit.services.badge_service import BadgeService
from reportit.services.report_service import ReportService
from reportit.services.user_service import UserService

__all__ = ["Actor", "BadgeService", "ReportService", "UserService"]
