"""
Bring the configured database up to the current schema

Runs the same Alembic revisions the API applies on startup. Useful before
deploying a new release or when adopting a store created by an older build.
"""

import sys

import structlog

from attendance_tracker.core.config import get_settings
from attendance_tracker.core.database import build_engine, run_migrations

logger = structlog.get_logger(__name__)


def main():
    """Main entry point for the migration job"""
    settings = get_settings()
    try:
        run_migrations(build_engine(settings.DATABASE_URL))
    except Exception as e:
        logger.error(f"Fatal error migrating database: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
