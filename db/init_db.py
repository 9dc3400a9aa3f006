"""
db/init_db.py
-------------
Creates the expected schema (tables) if it does not already exist.
The service itself never runs this; it is a convenience for a fresh
local database:
    python -m db.init_db
"""

from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Projects: portfolio entries grouping related milestones
CREATE TABLE IF NOT EXISTS projects (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(200) NOT NULL,
    description     TEXT NOT NULL DEFAULT '',
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Milestones: dated achievements belonging to a project
CREATE TABLE IF NOT EXISTS milestones (
    id              SERIAL PRIMARY KEY,
    title           VARCHAR(200) NOT NULL,
    milestone_date  TIMESTAMPTZ NOT NULL,
    description     TEXT NOT NULL DEFAULT '',
    body_url        TEXT,
    github_url      TEXT,
    image_url       TEXT,
    milestone_type  VARCHAR(20) NOT NULL
        CHECK (milestone_type IN ('project_major', 'project_minor', 'education', 'career')),
    status          VARCHAR(20) NOT NULL DEFAULT 'draft',
    project_id      INT NOT NULL REFERENCES projects(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_milestones_project_date ON milestones(project_id, milestone_date);
CREATE INDEX IF NOT EXISTS idx_milestones_status_date ON milestones(status, milestone_date);
"""


def create_tables(db) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        db: An object exposing ``execute(sql, params)``.
    """
    db.execute(SCHEMA_SQL)
    logger.info("Database schema initialized successfully.")


if __name__ == "__main__":
    from config import load_settings
    from db.connection import PostgresDatabase

    database = PostgresDatabase(load_settings())
    try:
        create_tables(database)
    finally:
        database.close()
    print("Database schema created successfully.")
