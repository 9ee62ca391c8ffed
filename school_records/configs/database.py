import logging

from sqlmodel import SQLModel, create_engine, Session

from .settings import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL or (
    f"postgresql://{settings.DB_USER}:{settings.DB_PASSWORD}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
)


def make_engine(url: str):
    """Create an engine whose every call is bounded by the configured timeouts."""
    if url.startswith("sqlite"):
        return create_engine(url, echo=settings.DB_ECHO, connect_args={"check_same_thread": False})

    connect_args = {
        "connect_timeout": settings.DB_CONNECT_TIMEOUT_SECONDS,
        "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}",
    }
    return create_engine(
        url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        pool_timeout=settings.DB_POOL_TIMEOUT_SECONDS,
        connect_args=connect_args,
    )


engine = make_engine(DATABASE_URL)

def init_db():
    # Register every table on the metadata before creating it
    import school_records.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database schema is up to date")

def get_db():
    with Session(engine) as session:
        yield session
