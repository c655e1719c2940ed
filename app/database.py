from datetime import datetime, timezone
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import QueuePool, StaticPool
from app.config import settings
import logging

logger = logging.getLogger(__name__)


# ─── Engine ────────────────────────────────────────────────────────────────────
def _engine_options() -> dict:
    options = {
        "pool_pre_ping": True,          # Detect stale connections before using them
        "echo": settings.DATABASE_ECHO,
    }
    if settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
        # In-memory SQLite: one shared connection so every session sees the same DB
        if ":memory:" in settings.DATABASE_URL:
            options["poolclass"] = StaticPool
    else:
        options.update(
            poolclass=QueuePool,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_timeout=settings.DATABASE_POOL_TIMEOUT,
        )
    return options


engine = create_engine(settings.DATABASE_URL, **_engine_options())


# ─── Session Factory ───────────────────────────────────────────────────────────
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,      # Avoid DetachedInstanceError after commit
)


# ─── Base Model ────────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.
    All models in app/models/ should inherit from this class.
    """
    pass


# ─── Dependency Injection ──────────────────────────────────────────────────────
def get_db():
    """
    FastAPI dependency that provides a database session per request.
    Automatically closes session after request completes.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# ─── Lifecycle ─────────────────────────────────────────────────────────────────
def init_db() -> None:
    """Create tables and indexes that do not exist yet."""
    import app.models  # noqa: F401 — registers every model on Base.metadata

    Base.metadata.create_all(bind=engine)


def close_db() -> None:
    engine.dispose()


# ─── Health Check ──────────────────────────────────────────────────────────────
def check_db_connection() -> bool:
    """Verify database is reachable. Used at startup."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def utcnow() -> datetime:
    """Timestamp used for createdAt / updatedAt columns."""
    return datetime.now(timezone.utc)
