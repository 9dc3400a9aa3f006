"""
models/updates.py
-----------------
Partial-update values for projects and milestones.

Every field starts as UNSET. Only fields the caller assigns are written;
assigning None writes SQL NULL. Each class lists its columns explicitly
in COLUMNS, and that order is the order of the generated SET clause.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterator, Optional, Union

from models.milestone import MilestoneType


class _Unset:
    """Marker for a field the caller did not provide."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


class PartialUpdate:
    COLUMNS: tuple[tuple[str, str], ...] = ()

    def set_fields(self) -> Iterator[tuple[str, Any]]:
        """Yield (column, value) for every field that was set, in COLUMNS order."""
        for attr, column in self.COLUMNS:
            value = getattr(self, attr)
            if value is not UNSET:
                yield column, value


@dataclass
class ProjectUpdate(PartialUpdate):
    name: Union[str, _Unset] = UNSET
    description: Union[str, _Unset] = UNSET

    COLUMNS = (
        ("name", "name"),
        ("description", "description"),
    )


@dataclass
class MilestoneUpdate(PartialUpdate):
    title: Union[str, _Unset] = UNSET
    milestone_date: Union[datetime, _Unset] = UNSET
    description: Union[str, _Unset] = UNSET
    body_url: Union[Optional[str], _Unset] = UNSET
    github_url: Union[Optional[str], _Unset] = UNSET
    image_url: Union[Optional[str], _Unset] = UNSET
    milestone_type: Union[MilestoneType, _Unset] = UNSET
    status: Union[str, _Unset] = UNSET
    project_id: Union[int, _Unset] = UNSET

    COLUMNS = (
        ("title", "title"),
        ("milestone_date", "milestone_date"),
        ("description", "description"),
        ("body_url", "body_url"),
        ("github_url", "github_url"),
        ("image_url", "image_url"),
        ("milestone_type", "milestone_type"),
        ("status", "status"),
        ("project_id", "project_id"),
    )
