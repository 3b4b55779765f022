# app/core/migrations.py
import asyncio
import logging

from alembic import command
from alembic.config import Config

from app.core.config import BASE_DIR, settings
from app.core.database import AsyncSessionLocal, Base, engine
from app.crud.category import seed_default_categories

# Register every table on Base.metadata
from app.models import account, budget, category, plaid_item, transaction, user  # noqa: F401

logger = logging.getLogger(__name__)

def alembic_config() -> Config:
    cfg = Config(str(BASE_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(BASE_DIR / "alembic"))
    cfg.attributes["configure_logger"] = False
    return cfg

async def run_migrations() -> None:
    """Upgrade the schema to the latest Alembic revision."""
    # alembic's env.py drives its own event loop, so it runs in a worker thread
    await asyncio.to_thread(command.upgrade, alembic_config(), "head")

async def create_db_and_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def prepare_database() -> None:
    """Bring the schema up to date and make sure the default categories exist."""
    if settings.RUN_MIGRATIONS:
        await run_migrations()
        logger.info("Database migrations applied")
    else:
        await create_db_and_tables()
        logger.info("Database tables created from models")

    async with AsyncSessionLocal() as session:
        created = await seed_default_categories(session)
    if created:
        logger.info(f"Seeded {len(created)} default categories")
