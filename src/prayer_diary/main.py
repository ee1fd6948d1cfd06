from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from prayer_diary.database import init_db
from prayer_diary.rotation import (
    InvalidDay,
    InvalidMonthFilter,
    PermissionDenied,
    RotationError,
    StoreUnavailable,
    SubjectNotFound,
)
from prayer_diary.routers import (
    calendar,
    print_calendar,
    profiles,
    settings,
    topics,
    updates,
    urgent,
)
from prayer_diary.utils.logging import get_logger

BASE_DIR = Path(__file__).resolve().parent.parent.parent

logger = get_logger(__name__)

# Rotation errors and the HTTP status each one answers with
ERROR_STATUS = {
    PermissionDenied: 403,
    SubjectNotFound: 404,
    InvalidDay: 422,
    InvalidMonthFilter: 422,
    StoreUnavailable: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Prayer Diary started")
    yield


app = FastAPI(
    title="Prayer Diary",
    description="Church prayer calendar, updates and urgent requests",
    version="0.1.0",
    lifespan=lifespan,
)

# Static files
static_dir = BASE_DIR / "static"
if static_dir.is_dir():
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

# Include routers
app.include_router(calendar.router)
app.include_router(profiles.router)
app.include_router(topics.router)
app.include_router(updates.router)
app.include_router(urgent.router)
app.include_router(settings.router)
app.include_router(print_calendar.router)


@app.exception_handler(RotationError)
async def rotation_error_handler(request: Request, exc: RotationError):
    status_code = ERROR_STATUS.get(type(exc), 400)
    if status_code == 403:
        logger.warning("Denied %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/", response_class=RedirectResponse)
def index():
    """Redirect root to today's prayer calendar."""
    return RedirectResponse(url="/api/calendar/today")


@app.get("/health")
def health():
    return {"status": "ok", "service": "prayer-diary", "version": app.version}
