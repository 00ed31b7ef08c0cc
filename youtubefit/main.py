import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from youtubefit.config.settings import settings
from youtubefit.core.logger import setup_logger_from_settings
from youtubefit.db.init_db import init_db
from youtubefit.db.session import check_database_connection
from youtubefit.history.routes import router as history_router
from youtubefit.ingestion.routes import router as import_router
from youtubefit.planner.routes import router as planner_router
from youtubefit.playlists.routes import router as playlists_router
from youtubefit.recommendation.routes import router as recommendation_router
from youtubefit.saved.routes import favorites_router, watchlater_router
from youtubefit.workouts.routes import router as workouts_router

# Initialize logger
setup_logger_from_settings()

ENDPOINTS = {
    "workouts": "/workouts",
    "history": "/history",
    "recommendation": "/recommendation/today",
    "warmup_cooldown": "/recommendation/warmup-cooldown/{workout_id}",
    "weekly_planner": "/weeklyplanner",
    "favorites": "/favorites",
    "watch_later": "/watchlater",
    "playlists": "/playlists",
    "import": "/import/csv",
    "import_history": "/import/history",
    "health": "/health",
}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Create tables and run the yoga reclassification before serving.

    Note: FastAPI requires async for lifespan context manager,
    even if no await operations are used.
    """
    check_database_connection()
    init_db()
    logger.info(f"[STARTUP] YouTubeFit API ready on {settings.host}:{settings.port}")

    await asyncio.sleep(0)
    yield

    logger.info("[SHUTDOWN] YouTubeFit API stopped")


app = FastAPI(title="YouTubeFit API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(workouts_router)
app.include_router(history_router)
app.include_router(recommendation_router)
app.include_router(planner_router)
app.include_router(favorites_router)
app.include_router(watchlater_router)
app.include_router(playlists_router)
app.include_router(import_router)

logger.info("FastAPI application initialized")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests."""
    logger.debug(f"Request: {request.method} {request.url.path}")
    response = await call_next(request)
    logger.debug(f"Response: {response.status_code} for {request.method} {request.url.path}")
    return response


@app.get("/")
def root():
    return {"message": "YouTubeFit API", "endpoints": ENDPOINTS}
