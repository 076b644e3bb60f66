"""
Report model and enums
"""
import enum
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from reportit.database import Base


class ReportStatus(str, enum.Enum):
    """Report status enum"""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    ASSIGNED = "assigned"
    COMPLETED = "completed"


class Category(str, enum.Enum):
    """Civic issue category enum"""
    ROAD_DAMAGE = "road-damage"
    GARBAGE = "garbage"
    STREET_LIGHT = "street-light"
    WATER_SEWAGE = "water-sewage"
    OTHER = "other"


def _enum_values(enum_cls) -> List[str]:
    return [member.value for member in enum_cls]


class Report(Base):
    """A civic issue filed by a citizen"""

    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[Category] = mapped_column(
        Enum(Category, name="category", values_callable=_enum_values), nullable=False
    )
    status: Mapped[ReportStatus] = mapped_column(
        Enum(ReportStatus, name="reportstatus", values_callable=_enum_values),
        default=ReportStatus.PENDING,
        nullable=False,
        index=True,
    )

    # Location details
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    neighborhood: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    latitude: Mapped[str] = mapped_column(String(32), nullable=False)
    longitude: Mapped[str] = mapped_column(String(32), nullable=False)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    assigned_to: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Photo URLs in upload order; the list only ever grows
    photos: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Report {self.id} - {self.status.value}>"
