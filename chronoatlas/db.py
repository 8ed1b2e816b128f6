import argparse
import asyncio

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from chronoatlas import models  # noqa: F401
from chronoatlas.config import settings
from chronoatlas.models.base import Base
from chronoatlas.utils.logger import setup_logger

logger = setup_logger("db")


def normalize_database_url(database_url: str | None) -> str:
    """Return an async driver URL, rewriting plain ``postgresql://`` to asyncpg."""
    if not database_url:
        raise ValueError(
            "CHRONOATLAS_DATABASE_URL environment variable not set for the payload cache"
        )

    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith(("postgresql+asyncpg://", "sqlite+aiosqlite://")):
        return database_url
    raise ValueError(f"Unsupported database URL prefix: {database_url}")


def create_db_engine(database_url: str | None = None) -> AsyncEngine:
    """Create the async engine backing the payload cache."""
    url = normalize_database_url(database_url or settings.app_database_url)
    logger.debug(f"Payload cache DB URL: {url}")

    if url.startswith("sqlite"):
        return create_async_engine(url, echo=False)

    return create_async_engine(
        url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_timeout=60,
        pool_recycle=300,
        echo=False,
        connect_args={"timeout": 30},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine):
    """Create the cache table if it does not exist yet."""
    logger.debug(
        f"Tables registered in Base.metadata: {list(Base.metadata.tables.keys())}"
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema initialized.")


async def close_db(engine: AsyncEngine):
    """Closes database connections."""
    logger.info("Closing database connections.")
    await engine.dispose()
    logger.info("Database connections closed.")


async def check_db_connection(engine: AsyncEngine, db_name: str = "Cache DB") -> bool:
    """Performs a simple query to check actual DB connectivity."""
    session_maker = create_session_factory(engine)
    async with session_maker() as session:
        try:
            result = await session.execute(text("SELECT 1"))
            if result.scalar_one() == 1:
                logger.info(
                    f"Successfully connected to {db_name} and executed a test query."
                )
                return True
            logger.error(f"Test query to {db_name} did not return 1. This is unexpected.")
            return False
        except Exception as e:
            logger.error(
                f"Failed to execute test query on {db_name}: {e}", exc_info=True
            )
            raise RuntimeError(
                f"Database connectivity check failed for {db_name}."
            ) from e


async def _run_action(action: str):
    engine = create_db_engine()
    try:
        if action == "init":
            await init_db(engine)
        elif action == "check":
            await check_db_connection(engine)
    finally:
        await close_db(engine)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Payload cache database utility")
    parser.add_argument(
        "action",
        choices=["init", "check"],
        help=f"'init' to create table '{settings.cache_table_name}', "
        f"'check' to verify database connectivity.",
    )
    args = parser.parse_args()
    asyncio.run(_run_action(args.action))
    logger.info("Payload cache database utility finished.")
