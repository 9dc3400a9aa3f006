"""
models/project.py
-----------------
Domain model for portfolio projects.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from models.milestone import Milestone


@dataclass
class Project:
    """
    A portfolio entry grouping related milestones.

    Attributes:
        name: Display name.
        description: Free text description.
        created_at: Timestamp when the record was created.
        milestones: Owned milestones; empty when none exist or when the
            caller did not load them.
        id: Database primary key (None for new records).
    """
    name: str
    description: str = ""
    created_at: Optional[datetime] = None
    milestones: list[Milestone] = field(default_factory=list)
    id: Optional[int] = None

    def ranked_tags(self) -> list[str]:
        """
        Tag names across all milestones, most frequent first.

        Every occurrence counts, including repeats within one milestone.
        Order between tags with equal counts is unspecified.
        """
        counts = Counter(tag for m in self.milestones for tag in m.tags)
        return [tag for tag, _ in counts.most_common()]

    def published_milestones(self) -> list[Milestone]:
        return [m for m in self.milestones if m.is_published()]
