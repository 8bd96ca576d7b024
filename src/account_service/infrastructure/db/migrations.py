"""Programmatic Alembic upgrade used at service startup."""

from __future__ import annotations

import logging

from alembic.config import Config

from alembic import command

logger = logging.getLogger(__name__)


def upgrade_database(database_url: str, *, config_path: str = "alembic.ini") -> None:
    """Upgrade the target database schema to the latest revision.

    Must run outside a running event loop: async driver URLs are migrated by
    `alembic/env.py` through `asyncio.run`.
    """

    alembic_config = Config(config_path)
    # Keep the process logging setup instead of the ini file's.
    alembic_config.attributes["configure_logger"] = False
    # ConfigParser interpolation treats "%" as a directive.
    alembic_config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    command.upgrade(alembic_config, "head")
    logger.info("database_migrations_applied revision=head")
