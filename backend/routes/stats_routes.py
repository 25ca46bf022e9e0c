import logging

from fastapi import APIRouter, Depends, HTTPException, Query

import config
from auth import get_current_user
from repository import Repository, get_repository
from services.question_service import QuestionService
from services.stats_service import StatsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/stats", tags=["Stats"])


@router.get("")
async def get_stats(
    window: int = Query(config.STATS_WINDOW_DAYS, ge=1, le=config.STATS_MAX_WINDOW_DAYS),
    user_id: str = Depends(get_current_user),
    repo: Repository = Depends(get_repository),
):
    """Counts, completion rate, streaks and the activity heatmap for the dashboard and profile."""
    try:
        questions = QuestionService.get_all(repo, user_id)
    except Exception as e:
        logger.error(f"Failed to load questions for stats: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return StatsService.compute_stats(questions, StatsService.today(), window_days=window)
