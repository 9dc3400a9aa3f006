"""
repositories/portfolio_repo.py
-------------------------------
Data access layer for projects and milestones.
All SQL queries related to the `projects` and `milestones` tables live here.

The database object is injected and only needs two methods:
    execute(sql, params) -> affected row count
    query(sql, params)   -> list of row tuples
"""

from enum import Enum
from typing import Any

from models.milestone import Milestone, MilestoneType
from models.project import Project
from models.updates import MilestoneUpdate, ProjectUpdate, PartialUpdate
from utils.errors import InvalidArgumentError, NotFoundError, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

_MILESTONE_COLUMNS = """
    id, title, milestone_date, description, body_url,
    github_url, image_url, milestone_type, status, project_id
"""

GET_ALL_PROJECTS = """
    SELECT id, name, description, created_at
    FROM projects
    ORDER BY id;
"""

GET_PROJECT_BY_ID = """
    SELECT
        p.id, p.name, p.description, p.created_at,
        m.id, m.title, m.milestone_date, m.description,
        m.body_url, m.github_url, m.image_url,
        m.milestone_type, m.status, m.project_id
    FROM projects p
    LEFT JOIN milestones m ON p.id = m.project_id
    WHERE p.id = %s
    ORDER BY m.milestone_date;
"""

GET_MILESTONE_BY_ID = f"""
    SELECT {_MILESTONE_COLUMNS}
    FROM milestones
    WHERE id = %s;
"""

GET_ALL_PUBLISHED_MILESTONES = f"""
    SELECT {_MILESTONE_COLUMNS}
    FROM milestones
    WHERE status = 'published'
    ORDER BY milestone_date DESC;
"""

CREATE_PROJECT = """
    INSERT INTO projects (name, description)
    VALUES (%s, %s)
    RETURNING id;
"""

CREATE_MILESTONE = """
    INSERT INTO milestones (
        title, milestone_date, description, body_url,
        github_url, image_url, milestone_type, status, project_id
    )
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
    RETURNING id;
"""

DELETE_PROJECT = "DELETE FROM projects WHERE id = %s;"
DELETE_MILESTONE = "DELETE FROM milestones WHERE id = %s;"


def build_update_query(table: str, record_id: int, update: PartialUpdate) -> tuple[str, list]:
    """
    Build an UPDATE statement touching only the fields set on `update`.

    Args:
        table: Target table name.
        record_id: Primary key of the row to update.
        update: A ProjectUpdate or MilestoneUpdate.

    Returns:
        (sql, params) with one placeholder per set field followed by the id.

    Raises:
        InvalidArgumentError: If no field is set.
    """
    set_clauses = []
    params: list = []
    for column, value in update.set_fields():
        set_clauses.append(f"{column} = %s")
        params.append(_to_db(value))

    if not set_clauses:
        raise InvalidArgumentError("no fields to update")

    sql = f"UPDATE {table} SET {', '.join(set_clauses)} WHERE id = %s;"
    params.append(record_id)
    return sql, params


def _to_db(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class PortfolioRepository:
    """Repository for CRUD operations on the projects and milestones tables."""

    def __init__(self, db):
        self.db = db

    # ── READ ──────────────────────────────────────────────

    def get_all_projects(self) -> list[Project]:
        """
        Fetch every project ordered by id, without milestones.

        Returns:
            List of Project objects, each with an empty milestones list.
        """
        rows = self.db.query(GET_ALL_PROJECTS)
        return [self._decode(self._row_to_project, r) for r in rows]

    def get_project_by_id(self, project_id: int) -> Project:
        """
        Fetch a single project with its milestones (date ascending).

        Raises:
            NotFoundError: If no project has this id.
        """
        projects = self._query_projects_with_milestones(GET_PROJECT_BY_ID, (project_id,))
        if not projects:
            raise NotFoundError(f"project with id {project_id} not found")
        return projects[0]

    def get_milestone_by_id(self, milestone_id: int) -> Milestone:
        """
        Fetch a single milestone by id.

        Raises:
            NotFoundError: If no milestone has this id.
        """
        rows = self.db.query(GET_MILESTONE_BY_ID, (milestone_id,))
        if not rows:
            raise NotFoundError(f"milestone with id {milestone_id} not found")
        return self._decode(self._row_to_milestone, rows[0])

    def get_all_published_milestones(self) -> list[Milestone]:
        """Fetch every milestone with status 'published', newest first."""
        rows = self.db.query(GET_ALL_PUBLISHED_MILESTONES)
        return [self._decode(self._row_to_milestone, r) for r in rows]

    def _query_projects_with_milestones(self, sql: str, params: tuple) -> list[Project]:
        """Group joined (project, milestone) rows into projects, in first-seen order."""
        projects: dict[int, Project] = {}

        for row in self.db.query(sql, params):
            project_id = row[0]
            project = projects.get(project_id)
            if project is None:
                project = self._decode(self._row_to_project, row[:4])
                projects[project_id] = project

            # NULL milestone columns: project without milestones
            if row[4] is not None:
                project.milestones.append(self._decode(self._row_to_milestone, row[4:]))

        # dicts keep insertion order
        return list(projects.values())

    # ── CREATE ────────────────────────────────────────────

    def create_project(self, name: str, description: str) -> int:
        """
        Insert a new project.

        Returns:
            The generated project id.
        """
        rows = self.db.query(CREATE_PROJECT, (name, description))
        if not rows:
            raise StorageError("failed to get created project id")
        project_id = rows[0][0]
        logger.info(f"Created project #{project_id} ({name})")
        return project_id

    def create_milestone(self, milestone: Milestone) -> int:
        """
        Insert a new milestone, using every field of `milestone`.

        Returns:
            The generated milestone id.
        """
        rows = self.db.query(CREATE_MILESTONE, (
            milestone.title, milestone.milestone_date, milestone.description,
            milestone.body_url, milestone.github_url, milestone.image_url,
            _to_db(milestone.milestone_type), milestone.status, milestone.project_id,
        ))
        if not rows:
            raise StorageError("failed to get created milestone id")
        milestone_id = rows[0][0]
        logger.info(f"Created milestone #{milestone_id} for project #{milestone.project_id}")
        return milestone_id

    # ── UPDATE ────────────────────────────────────────────

    def update_project(self, project_id: int, update: ProjectUpdate) -> None:
        """
        Partially update a project; only set fields are written.

        Raises:
            InvalidArgumentError: If `update` has no set field.
            NotFoundError: If no project has this id.
        """
        sql, params = build_update_query("projects", project_id, update)
        if self.db.execute(sql, params) == 0:
            raise NotFoundError(f"project with id {project_id} not found")
        logger.info(f"Updated project #{project_id}")

    def update_milestone(self, milestone_id: int, update: MilestoneUpdate) -> None:
        """
        Partially update a milestone; only set fields are written.

        Raises:
            InvalidArgumentError: If `update` has no set field.
            NotFoundError: If no milestone has this id.
        """
        sql, params = build_update_query("milestones", milestone_id, update)
        if self.db.execute(sql, params) == 0:
            raise NotFoundError(f"milestone with id {milestone_id} not found")
        logger.info(f"Updated milestone #{milestone_id}")

    # ── DELETE ────────────────────────────────────────────

    def delete_project(self, project_id: int) -> None:
        """Delete a project; its milestones go with it (ON DELETE CASCADE)."""
        if self.db.execute(DELETE_PROJECT, (project_id,)) == 0:
            raise NotFoundError(f"project with id {project_id} not found")
        logger.info(f"Deleted project #{project_id}")

    def delete_milestone(self, milestone_id: int) -> None:
        """Delete a milestone by id."""
        if self.db.execute(DELETE_MILESTONE, (milestone_id,)) == 0:
            raise NotFoundError(f"milestone with id {milestone_id} not found")
        logger.info(f"Deleted milestone #{milestone_id}")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _decode(converter, row: tuple):
        try:
            return converter(row)
        except (IndexError, TypeError, ValueError) as e:
            logger.error(f"Failed to decode row {row!r}: {e}")
            raise StorageError(f"failed to decode row: {e}") from e

    @staticmethod
    def _row_to_project(row: tuple) -> Project:
        """Convert a (id, name, description, created_at) row to a Project."""
        return Project(
            id=row[0],
            name=row[1],
            description=row[2],
            created_at=row[3],
        )

    @staticmethod
    def _row_to_milestone(row: tuple) -> Milestone:
        """Convert a milestone row tuple to a Milestone domain object."""
        return Milestone(
            id=row[0],
            title=row[1],
            milestone_date=row[2],
            description=row[3] or "",
            body_url=row[4],
            github_url=row[5],
            image_url=row[6],
            milestone_type=MilestoneType(row[7]),
            status=row[8],
            project_id=row[9],
        )
