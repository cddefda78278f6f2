import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from translatable.config import settings

logger = logging.getLogger(__name__)


def enable_sqlite_savepoints(engine) -> None:
    """Let the SQLite driver honour SAVEPOINT.

    pysqlite (and aiosqlite on top of it) issues its own BEGIN and commits
    around savepoints. Turn that off and emit BEGIN from SQLAlchemy instead.
    """
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    logger.debug("SQLite savepoint support enabled for %s", engine.url)


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,  # Enable query logging in debug mode
)
if engine.dialect.name == "sqlite":
    enable_sqlite_savepoints(engine)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db():
    logger.debug("Opening database session...")
    async with AsyncSessionLocal() as db:
        try:
            yield db
        except Exception as e:
            logger.error("Database session error: %s", e)
            raise
        finally:
            await db.close()
            logger.debug("Database session closed.")
