"""
Achievement badge definitions
"""
import enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ActivityType(str, enum.Enum):
    """User activity counters that badges are awarded on"""
    REPORTS = "reports"
    UPDATES = "updates"
    COMPLETED = "completed"


# Counter column on User for each activity type
COUNTER_FIELDS: Dict[ActivityType, str] = {
    ActivityType.REPORTS: "report_count",
    ActivityType.UPDATES: "update_count",
    ActivityType.COMPLETED: "completed_count",
}


class BadgeCriteria(BaseModel):
    """Threshold a user counter has to reach"""
    model_config = ConfigDict(frozen=True)

    type: ActivityType
    count: int = Field(..., ge=1)


class BadgeDefinition(BaseModel):
    """Static badge definition"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    icon: str
    level: int = Field(..., ge=1, le=3)
    criteria: BadgeCriteria


def _badge(id: str, name: str, description: str, icon: str, level: int,
           type: ActivityType, count: int) -> BadgeDefinition:
    return BadgeDefinition(
        id=id,
        name=name,
        description=description,
        icon=icon,
        level=level,
        criteria=BadgeCriteria(type=type, count=count),
    )


BADGE_DEFINITIONS: tuple[BadgeDefinition, ...] = (
    _badge("first-report", "First Report", "Submitted your first report",
           "star", 1, ActivityType.REPORTS, 1),
    _badge("active-reporter", "Active Reporter", "Submitted 5 reports",
           "award", 2, ActivityType.REPORTS, 5),
    _badge("super-reporter", "Super Reporter", "Submitted 10 reports",
           "trophy", 3, ActivityType.REPORTS, 10),
    _badge("first-update", "First Update", "Posted your first update on a report",
           "message-circle", 1, ActivityType.UPDATES, 1),
    _badge("active-commenter", "Active Commenter", "Posted 10 updates",
           "message-square", 2, ActivityType.UPDATES, 10),
    _badge("first-completed", "First Resolution", "One of your reports was resolved",
           "check-circle", 1, ActivityType.COMPLETED, 1),
    _badge("problem-solver", "Problem Solver", "Five of your reports were resolved",
           "check-square", 3, ActivityType.COMPLETED, 5),
)

_BY_ID: Dict[str, BadgeDefinition] = {badge.id: badge for badge in BADGE_DEFINITIONS}

if len(_BY_ID) != len(BADGE_DEFINITIONS):  # pragma: no cover
    raise RuntimeError("Duplicate badge id in BADGE_DEFINITIONS")


def get_badge(badge_id: str) -> Optional[BadgeDefinition]:
    """Look up a badge definition by id"""
    return _BY_ID.get(badge_id)


def badge_ids() -> List[str]:
    """All defined badge ids, in definition order"""
    return [badge.id for badge in BADGE_DEFINITIONS]
