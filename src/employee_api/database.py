"""Database connection and session management."""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.schema import CreateSchema

from employee_api.config import get_settings
from employee_api.models.orm import Base
from employee_api.models.orm.employee import EMPLOYEE_SCHEMA

logger = logging.getLogger(__name__)

settings = get_settings()

engine = create_async_engine(
    settings.async_database_url,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    # Validate connections before checkout to detect stale connections
    pool_pre_ping=True,
    # Recycle connections after 1 hour (important for cloud proxies)
    pool_recycle=3600,
    # Never echo SQL statements as they carry employee data
    echo=False,
    # Bound every statement; a cancelled request cancels the awaited call
    connect_args={"command_timeout": settings.database_command_timeout},
    execution_options={"schema_translate_map": {EMPLOYEE_SCHEMA: settings.database_schema}},
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency.

    Commits when the request succeeds and rolls back on any error.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_schema(db_engine: AsyncEngine, schema: str | None = None) -> None:
    """Create the schema namespace and the employees table if missing.

    Args:
        db_engine: Engine to bootstrap
        schema: Schema name the engine maps the employees table to
    """
    async with db_engine.begin() as conn:
        if schema and conn.dialect.name == "postgresql":
            await conn.execute(CreateSchema(schema, if_not_exists=True))
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema verified")
