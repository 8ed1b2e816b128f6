from __future__ import annotations

import asyncio
from functools import wraps

from asyncpg.exceptions import ConnectionDoesNotExistError
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chronoatlas.utils.logger import setup_logger

logger = setup_logger("db_handlers")

MAX_CONNECTION_ATTEMPTS = 3


def _is_dropped_connection(e: DBAPIError) -> bool:
    return e.connection_invalidated or isinstance(
        getattr(e, "orig", None), ConnectionDoesNotExistError
    )


def check_local_db(func):
    """Database session decorator with transaction management and retry logic."""

    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        # A caller that passes its own session owns the transaction.
        if kwargs.get("db"):
            return await func(self, *args, **kwargs)

        last_exception = None
        for attempt in range(MAX_CONNECTION_ATTEMPTS):
            async with self.session_factory() as db:
                kwargs["db"] = db
                try:
                    result = await func(self, *args, **kwargs)
                    await db.commit()
                    return result
                except DBAPIError as e:
                    await db.rollback()
                    if _is_dropped_connection(e):
                        last_exception = e
                        logger.warning(
                            f"Connection error in {func.__name__} (attempt {attempt + 1}/{MAX_CONNECTION_ATTEMPTS}): {e}. Retrying..."
                        )
                        await asyncio.sleep(1 + attempt)
                        continue
                    logger.error(
                        f"DBAPIError in {func.__name__} (attempt {attempt + 1}/{MAX_CONNECTION_ATTEMPTS}): {e}",
                        exc_info=True,
                    )
                    raise
                except Exception as e:
                    await db.rollback()
                    logger.error(
                        f"Transaction failed in {func.__name__}: {e}", exc_info=True
                    )
                    raise

        logger.error(
            f"All retries failed for {func.__name__}. Last error: {last_exception}"
        )
        raise last_exception

    return wrapper


class BaseDBHandler:
    """Holds the session factory used by ``check_local_db``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory
