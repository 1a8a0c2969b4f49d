"""
Database connection management.

Provides the async SQLAlchemy engine and session factory used by the
SQL content store.

Dependencies: sqlalchemy, studycast.configs
System role: Database connection lifecycle management
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from studycast.configs import get_settings


def get_async_engine(url: str | None = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    pool_pre_ping=True verifies connections before use to detect stale/broken
    connections early. Pool sizing only applies to server databases; SQLite
    URLs get the driver's default pool.

    Args:
        url: Optional database URL overriding the configured one

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Raises:
        ArgumentError: If database URL is invalid or engine creation fails

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    settings = get_settings()
    db_config = settings.database
    database_url = url or db_config.async_database_url

    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=db_config.echo_sql)

    return create_async_engine(
        database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    Returns fresh async_sessionmaker bound to engine with autoflush=False for
    explicit transaction control and expire_on_commit=False so rows stay
    readable after commit.

    Args:
        engine: Optional engine (created from settings if None)

    Returns:
        async_sessionmaker: Async session factory configured for manual transaction control

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )
