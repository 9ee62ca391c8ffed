import os

# Settings are read at import time, provide everything the app requires
os.environ.setdefault("DB_USER", "records")
os.environ.setdefault("DB_PASSWORD", "records")
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_PORT", "5432")
os.environ.setdefault("DB_NAME", "records_test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORAGE_ENDPOINT", "localhost:9000")
os.environ.setdefault("STORAGE_ACCESS_KEY", "minioadmin")
os.environ.setdefault("STORAGE_SECRET_KEY", "minioadmin123")
os.environ.setdefault("JWT_ACCESS_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")
os.environ.setdefault("ENV_FILE", os.devnull)
