import re
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app import create_app
from db.init_db import SCHEMA_SQL
from repositories import portfolio_repo as repo_sql
from repositories.portfolio_repo import PortfolioRepository
from services.portfolio_service import PortfolioService
from utils.errors import StorageError

_UPDATE_RE = re.compile(r"UPDATE (\w+) SET (.+) WHERE id = %s;")

_MILESTONE_FIELDS = (
    "id", "title", "milestone_date", "description", "body_url",
    "github_url", "image_url", "milestone_type", "status", "project_id",
)


class InMemoryDatabase:
    """
    Stand-in for PostgresDatabase that understands the repository's statements.
    Every call is recorded in `statements` as (sql, params).
    """

    def __init__(self):
        self.projects: dict[int, dict] = {}
        self.milestones: dict[int, dict] = {}
        self.statements: list[tuple] = []
        self._next_id = {"projects": 1, "milestones": 1}

    # ── capability ────────────────────────────────────────

    def query(self, sql, params=None):
        self.statements.append((sql, params))
        if sql == repo_sql.GET_ALL_PROJECTS:
            return [self._project_row(p) for _, p in sorted(self.projects.items())]
        if sql == repo_sql.GET_PROJECT_BY_ID:
            return self._joined_rows(params[0])
        if sql == repo_sql.GET_MILESTONE_BY_ID:
            m = self.milestones.get(params[0])
            return [self._milestone_row(m)] if m else []
        if sql == repo_sql.GET_ALL_PUBLISHED_MILESTONES:
            published = [m for m in self.milestones.values() if m["status"] == "published"]
            published.sort(key=lambda m: m["milestone_date"], reverse=True)
            return [self._milestone_row(m) for m in published]
        if sql == repo_sql.CREATE_PROJECT:
            name, description = params
            pid = self._insert("projects", {
                "name": name,
                "description": description,
                "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
            })
            return [(pid,)]
        if sql == repo_sql.CREATE_MILESTONE:
            record = dict(zip(_MILESTONE_FIELDS[1:], params))
            if record["project_id"] not in self.projects:
                raise StorageError("violates foreign key constraint")
            return [(self._insert("milestones", record),)]
        raise AssertionError(f"unexpected query: {sql}")

    def execute(self, sql, params=None):
        self.statements.append((sql, params))
        if sql == SCHEMA_SQL:
            return 0
        if sql == repo_sql.DELETE_PROJECT:
            if self.projects.pop(params[0], None) is None:
                return 0
            for mid in [k for k, m in self.milestones.items() if m["project_id"] == params[0]]:
                del self.milestones[mid]
            return 1
        if sql == repo_sql.DELETE_MILESTONE:
            return 1 if self.milestones.pop(params[0], None) is not None else 0
        match = _UPDATE_RE.match(sql)
        if match:
            table = getattr(self, match.group(1))
            columns = [c.split(" = ")[0] for c in match.group(2).split(", ")]
            record = table.get(params[-1])
            if record is None:
                return 0
            record.update(zip(columns, params[:-1]))
            return 1
        raise AssertionError(f"unexpected statement: {sql}")

    # ── helpers ───────────────────────────────────────────

    def _insert(self, table, record):
        new_id = self._next_id[table]
        self._next_id[table] += 1
        record["id"] = new_id
        getattr(self, table)[new_id] = record
        return new_id

    @staticmethod
    def _project_row(p):
        return (p["id"], p["name"], p["description"], p["created_at"])

    @staticmethod
    def _milestone_row(m):
        return tuple(m[f] for f in _MILESTONE_FIELDS)

    def _joined_rows(self, project_id):
        project = self.projects.get(project_id)
        if project is None:
            return []
        children = sorted(
            (m for m in self.milestones.values() if m["project_id"] == project_id),
            key=lambda m: m["milestone_date"],
        )
        if not children:
            return [self._project_row(project) + (None,) * len(_MILESTONE_FIELDS)]
        return [self._project_row(project) + self._milestone_row(m) for m in children]


class BrokenDatabase:
    """Every statement fails the way PostgresDatabase reports driver errors."""

    def query(self, sql, params=None):
        raise StorageError("connection reset by peer")

    def execute(self, sql, params=None):
        raise StorageError("connection reset by peer")


@pytest.fixture
def db():
    return InMemoryDatabase()


@pytest.fixture
def repo(db):
    return PortfolioRepository(db)


@pytest.fixture
def client(repo):
    return TestClient(create_app(PortfolioService(repo)))


@pytest.fixture
def broken_client():
    return TestClient(create_app(PortfolioService(PortfolioRepository(BrokenDatabase()))))
