import asyncio
import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from interview_prep import __version__
from interview_prep.config import CLIENT_URL
from interview_prep.database import (
    DatabaseManager,
    DatabaseUnavailableError,
    db_manager,
    get_db_manager,
)
from interview_prep.errors import register_exception_handlers
from interview_prep.logger import setup_logging
from interview_prep.routers import ai_router, auth_router, questions_router, sessions_router
from interview_prep.services.storage import UPLOADS_DIR

setup_logging()
logger = logging.getLogger("interview_prep")

STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Requests retry the connection themselves, so a failure here is not fatal
    try:
        await asyncio.to_thread(db_manager.connect)
    except DatabaseUnavailableError as e:
        logger.error("Failed to connect to database at startup: %s", e)
    yield
    db_manager.dispose()
    logger.info("Shutdown complete")


app = FastAPI(title="Interview Prep API", version=__version__, lifespan=lifespan)

os.makedirs(UPLOADS_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=UPLOADS_DIR), name="uploads")

app.include_router(auth_router)
app.include_router(sessions_router)
app.include_router(questions_router)
app.include_router(ai_router)

register_exception_handlers(app)


def _strip_trailing_slash(value: str) -> str:
    return value[:-1] if value.endswith("/") else value


allowed_origins = [
    _strip_trailing_slash(origin.strip())
    for origin in CLIENT_URL.split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins or ["*"],
    allow_credentials=bool(allowed_origins),
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.get("/")
async def root():
    return {"message": "Interview Prep API is running"}


@app.get("/health")
async def health_check(manager: DatabaseManager = Depends(get_db_manager)):
    """Liveness probe; does not require the database to be up."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "database": manager.state.value,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=True)
