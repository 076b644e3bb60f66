"""
API Routers package
"""
from reportit.routers import auth, badges, reports

__all__ = ["auth", "badges", "reports"]
