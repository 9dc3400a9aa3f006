"""
services/portfolio_service.py
-----------------------------
Public visibility rules on top of PortfolioRepository.
Only milestones with status 'published' are ever exposed.
"""

from models.milestone import Milestone
from models.project import Project
from repositories.portfolio_repo import PortfolioRepository
from utils.errors import NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)


class PortfolioService:
    """Read-only public view of the portfolio."""

    def __init__(self, repo: PortfolioRepository):
        self.repo = repo

    def get_public_project(self, project_id: int) -> Project:
        """Fetch a project, keeping only its published milestones."""
        project = self.repo.get_project_by_id(project_id)
        project.milestones = project.published_milestones()
        return project

    def list_projects(self) -> list[Project]:
        """All projects, milestones omitted."""
        return self.repo.get_all_projects()

    def get_public_milestone(self, milestone_id: int) -> Milestone:
        """
        Fetch a milestone if it is published.

        Raises:
            NotFoundError: If it does not exist or is not published.
        """
        milestone = self.repo.get_milestone_by_id(milestone_id)
        if not milestone.is_published():
            logger.debug(f"Milestone #{milestone_id} hidden (status={milestone.status})")
            raise NotFoundError(f"milestone with id {milestone_id} not found")
        return milestone

    def list_public_milestones(self) -> list[Milestone]:
        """All published milestones, newest first."""
        return self.repo.get_all_published_milestones()
