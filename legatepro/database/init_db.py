"""Bring the database schema up to the latest alembic revision."""

from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig

import legatepro.database.db as db_module

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def build_alembic_config(database_url: str) -> AlembicConfig:
    cfg = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    cfg.attributes["configure_logger"] = False
    return cfg


def init_db(revision: str = "head") -> None:
    """Run `alembic upgrade` on the application's engine."""
    active_url = db_module.get_active_database_url()
    alembic_cfg = build_alembic_config(active_url)
    with db_module.get_engine().begin() as connection:
        alembic_cfg.attributes["connection"] = connection
        command.upgrade(alembic_cfg, revision)
    logger.info(
        "database.migrated",
        extra={
            "event": "database.migrated",
            "database_url_scheme": active_url.split("://", 1)[0],
            "revision": revision,
        },
    )


if __name__ == "__main__":
    from legatepro.core.startup import bootstrap

    bootstrap()
    init_db()
