import os
import sys

# Ensure this directory is in the path for Vercel and other runners
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.append(current_dir)

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS
from database import init_db
from supabase_client import is_supabase_configured

logger = logging.getLogger(__name__)

# Include active routers
try:
    from routes.question_routes import router as question_router
except Exception as e:
    logger.warning(f"question_routes not found or failed to load: {e}")
    question_router = None

try:
    from routes.solution_routes import router as solution_router
except Exception as e:
    logger.warning(f"solution_routes not found or failed to load: {e}")
    solution_router = None

try:
    from routes.profile_routes import router as profile_router
except Exception as e:
    logger.warning(f"profile_routes not found or failed to load: {e}")
    profile_router = None

try:
    from routes.stats_routes import router as stats_router
except Exception as e:
    logger.warning(f"stats_routes not found or failed to load: {e}")
    stats_router = None

# The local store only matters when Supabase is not configured
if not is_supabase_configured():
    try:
        init_db()
    except Exception as e:
        logger.error(f"Database init skipped or failed: {e}")

app = FastAPI(title="CodeTrack")


@app.get("/api/v1/health-check")
async def health():
    return {
        "status": "ok",
        "message": "Backend is alive!",
        "store": "supabase" if is_supabase_configured() else "local",
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in (question_router, solution_router, profile_router, stats_router):
    if router:
        app.include_router(router)


@app.get("/")
async def root():
    return {"status": "CodeTrack backend is running."}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
