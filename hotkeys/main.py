# hotkeys/main.py
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hotkeys import __version__
from hotkeys.api.routes import search
from hotkeys.config import settings
from hotkeys.services import get_search_service, get_shortcut_repository
from hotkeys.utils.async_utils import cleanup_executor

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ========== STARTUP ==========
    logger.info(f"🚀 Hotkeys search starting up (cache backend: {settings.cache_backend})")
    if settings.warmup_on_startup:
        t0 = time.time()
        await get_search_service().warmup_cache()
        logger.info(f"🔥 Search cache warmed ({time.time() - t0:.2f}s)")
    logger.info("✅ Startup complete")

    yield

    # ========== SHUTDOWN ==========
    logger.info("🛑 Shutting down...")
    await get_search_service().close()
    cleanup_executor()
    logger.info("✅ Shutdown complete")


app = FastAPI(
    title="Hotkeys Search API",
    description="Ranked keyboard-shortcut search with fuzzy and abbreviation matching",
    version=__version__,
    lifespan=lifespan
)


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "cache_backend": get_search_service().cache.backend_name,
        "records": len(get_shortcut_repository()),
    }


app.include_router(search.router)
