import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from school_records.api import attendance_api, auth_api, grade_api, student_api, subject_api, user_api
from school_records.configs import settings
from school_records.configs.database import init_db
from school_records.configs.logging_config import setup_logging
from school_records.errors import AuthError, RecordsError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    yield

app = FastAPI(title="School Records", debug=settings.DEBUG, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,  # Allowed origins
    allow_credentials=True,  # Allow cookies/auth headers
    allow_methods=["*"],  # Allow all HTTP methods
    allow_headers=["*"],  # Allow all headers
)


@app.exception_handler(RecordsError)
async def records_error_handler(request: Request, exc: RecordsError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


# Include routers
app.include_router(auth_api.router)
app.include_router(user_api.router)
app.include_router(student_api.router)
app.include_router(subject_api.router)
app.include_router(grade_api.router)
app.include_router(attendance_api.router)
