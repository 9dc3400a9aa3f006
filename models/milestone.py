"""
models/milestone.py
-------------------
Domain model for dated portfolio milestones.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

PUBLISHED = "published"


class MilestoneType(str, Enum):
    """Kind of milestone, stored as its string value."""
    MAJOR = "project_major"
    MINOR = "project_minor"
    EDUCATION = "education"
    CAREER = "career"


@dataclass
class Milestone:
    """
    Represents a dated achievement belonging to a project.

    Attributes:
        title: Short headline.
        milestone_date: When it happened.
        milestone_type: One of MilestoneType.
        project_id: Owning project.
        description: Longer text (may be empty).
        body_url: Optional link to a write-up.
        github_url: Optional source-repository link.
        image_url: Optional image link.
        status: Free text; only 'published' is publicly visible.
        tags: Tag names. Not persisted, always empty on reads.
        id: Database primary key (None for new records).
    """
    title: str
    milestone_date: datetime
    milestone_type: MilestoneType
    project_id: int
    description: str = ""
    body_url: Optional[str] = None
    github_url: Optional[str] = None
    image_url: Optional[str] = None
    status: str = "draft"
    tags: list[str] = field(default_factory=list)
    id: Optional[int] = None

    def is_published(self) -> bool:
        """Returns True if this milestone is publicly visible."""
        return self.status == PUBLISHED

    def __str__(self) -> str:
        return f"#{self.id} {self.title} ({self.milestone_type.value}, {self.status}) - {self.milestone_date:%Y-%m-%d}"
