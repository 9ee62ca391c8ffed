import logging

from school_records.configs.settings import settings


def setup_logging():
    """Configure root logging for the API process."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # SQL echo is controlled by DB_ECHO, keep the engine logger quiet otherwise
    if not settings.DB_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.info(f"Logging configured at level {settings.LOG_LEVEL.upper()}")
