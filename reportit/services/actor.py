"""
Acting user capability passed into the report workflow
"""
from pydantic import BaseModel, ConfigDict

from reportit.models.report import Report
from reportit.models.user import Role, User


class Actor(BaseModel):
    """Who is performing an operation: a citizen or an administrator"""
    model_config = ConfigDict(frozen=True)

    user_id: int
    role: Role = Role.USER

    @classmethod
    def citizen(cls, user_id: int) -> "Actor":
        return cls(user_id=user_id, role=Role.USER)

    @classmethod
    def admin(cls, user_id: int) -> "Actor":
        return cls(user_id=user_id, role=Role.ADMIN)

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(user_id=user.id, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def owns(self, report: Report) -> bool:
        return report.user_id == self.user_id

    def can_view(self, report: Report) -> bool:
        """Administrators see every report, citizens only their own"""
        return self.is_admin or self.owns(report)
