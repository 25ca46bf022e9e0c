"""
profile_service.py — User profile
One row per auth user. Supabase creates it on sign-up; the local store creates
it lazily on first read.
"""

import logging

from repository import Repository, PROFILES
from services.question_service import QuestionService
from supabase_client import is_supabase_configured, delete_auth_user

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("username", "avatar_url", "bio")


class ProfileService:
    @staticmethod
    def get(repo: Repository, user_id: str) -> dict:
        profile = repo.first(PROFILES, {"id": user_id})
        if profile:
            return profile
        logger.info("Creating missing profile for user %s", user_id)
        return repo.insert(PROFILES, {"id": user_id})

    @staticmethod
    def update(repo: Repository, user_id: str, data: dict) -> dict:
        ProfileService.get(repo, user_id)
        payload = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}
        if not payload:
            return ProfileService.get(repo, user_id)
        rows = repo.update(PROFILES, {"id": user_id}, payload)
        return rows[0] if rows else ProfileService.get(repo, user_id)

    @staticmethod
    def delete_account(repo: Repository, user_id: str) -> dict:
        """Remove the user's questions (and their solutions), then the account itself."""
        deleted = QuestionService.delete_all(repo, user_id)
        if is_supabase_configured():
            delete_auth_user(user_id)
            account_deleted = True
        else:
            repo.delete(PROFILES, {"id": user_id})
            account_deleted = False
        logger.info("Deleted %d questions for user %s", deleted, user_id)
        return {"questions_deleted": deleted, "account_deleted": account_deleted}
