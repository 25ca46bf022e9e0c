import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Optional

from auth import get_current_user
from repository import Repository, get_repository
from services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/profile", tags=["Profile"])


class ProfileUpdate(BaseModel):
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None


@router.get("")
async def get_profile(user_id: str = Depends(get_current_user), repo: Repository = Depends(get_repository)):
    try:
        return ProfileService.get(repo, user_id)
    except Exception as e:
        logger.error(f"Failed to load profile: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("")
async def update_profile(profile_data: ProfileUpdate, user_id: str = Depends(get_current_user),
                         repo: Repository = Depends(get_repository)):
    try:
        result = ProfileService.update(repo, user_id, profile_data.model_dump(exclude_unset=True))
        return {"status": "success", "data": result}
    except Exception as e:
        logger.error(f"Failed to update profile: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("")
async def delete_account(user_id: str = Depends(get_current_user), repo: Repository = Depends(get_repository)):
    """Delete all of the user's data and, with Supabase, the account itself."""
    try:
        result = ProfileService.delete_account(repo, user_id)
        return {"status": "success", **result}
    except Exception as e:
        logger.error(f"Failed to delete account: {e}")
        raise HTTPException(status_code=500, detail=str(e))
