import logging

from sqlalchemy import create_engine                   # SQLAlchemy engine (owns the connection pool)
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from config.settings import settings                   # ✅ env driven settings

logger = logging.getLogger(__name__)


def _engine_kwargs(url: str) -> dict:
    # in-memory SQLite must share one connection across threads
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_size": settings.DB_POOL_SIZE, "pool_pre_ping": True}


# ✅ one engine per process; the pool is created lazily on first checkout
engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))

# ✅ session factory, one Session per request
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ declarative base for every model
Base = declarative_base()


def get_db():
    """FastAPI dependency that yields a session and always closes it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create missing tables for every registered model."""
    import models  # noqa: F401  (registers the mappers on Base.metadata)

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured on %s", engine.url.render_as_string(hide_password=True))


def close_db():
    """Release every pooled connection (called on shutdown)."""
    engine.dispose()
    logger.info("Database connection pool disposed")
