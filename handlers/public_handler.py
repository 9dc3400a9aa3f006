"""
handlers/public_handler.py
--------------------------
Public read-only routes. Each route parses its path parameter,
delegates to PortfolioService and returns the records as JSON.
Errors propagate to the exception handlers registered in app.py.
"""

import re

from fastapi import APIRouter, Depends, Request

from models.milestone import Milestone
from models.project import Project
from services.portfolio_service import PortfolioService
from utils.errors import InvalidArgumentError

router = APIRouter(prefix="/api", tags=["public"])

_ID_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)


def get_service(request: Request) -> PortfolioService:
    return request.app.state.service


def _parse_id(raw: str, kind: str) -> int:
    if not _ID_RE.fullmatch(raw):
        raise InvalidArgumentError(f"Invalid {kind} ID")
    return int(raw)


@router.get("/projects/{project_id}")
def get_project(project_id: str, service: PortfolioService = Depends(get_service)) -> Project:
    """Project with its published milestones only."""
    return service.get_public_project(_parse_id(project_id, "project"))


@router.get("/projects")
def list_projects(service: PortfolioService = Depends(get_service)) -> list[Project]:
    return service.list_projects()


@router.get("/milestones/{milestone_id}")
def get_milestone(milestone_id: str, service: PortfolioService = Depends(get_service)) -> Milestone:
    """A single milestone, 404 unless published."""
    return service.get_public_milestone(_parse_id(milestone_id, "milestone"))


@router.get("/milestones")
def list_milestones(service: PortfolioService = Depends(get_service)) -> list[Milestone]:
    return service.list_public_milestones()
