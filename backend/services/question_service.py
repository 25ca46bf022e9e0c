"""
question_service.py — Coding question tracking
CRUD for a user's questions, list filtering/sorting, and the solved-time stamp
that feeds streaks.
"""

from datetime import datetime, timezone

from models.enums import Status
from repository import Repository, QUESTIONS

SORT_OPTIONS = ("newest", "oldest", "completed")
REQUIRED_FIELDS = ("title", "description", "language", "topic", "difficulty", "status")


class QuestionService:
    @staticmethod
    def create(repo: Repository, user_id: str, data: dict) -> dict:
        payload = dict(data)
        payload["user_id"] = user_id
        payload.setdefault("status", Status.TODO.value)
        if payload["status"] == Status.COMPLETED.value:
            payload["last_solved_at"] = datetime.now(timezone.utc)
        return repo.insert(QUESTIONS, payload)

    @staticmethod
    def get(repo: Repository, user_id: str, question_id: str) -> dict | None:
        return repo.first(QUESTIONS, {"id": question_id, "user_id": user_id})

    @staticmethod
    def get_all(repo: Repository, user_id: str) -> list[dict]:
        return repo.select(QUESTIONS, filters={"user_id": user_id}, order="created_at.desc")

    @staticmethod
    def search(repo: Repository, user_id: str, search: str = None, difficulty: str = None,
               status: str = None, language: str = None, topic: str = None,
               sort: str = "newest") -> list[dict]:
        """Filtered and sorted question list."""
        filters = {"user_id": user_id}
        if difficulty:
            filters["difficulty"] = difficulty
        if status:
            filters["status"] = status
        if language:
            filters["language"] = language
        if topic:
            filters["topic"] = topic

        order = "created_at.asc" if sort == "oldest" else "created_at.desc"
        questions = repo.select(QUESTIONS, filters=filters, order=order)

        if search:
            needle = search.lower()
            questions = [
                q for q in questions
                if needle in (q.get("title") or "").lower() or needle in (q.get("topic") or "").lower()
            ]

        if sort == "completed":
            # stable: completed first, newest first within each group
            questions.sort(key=lambda q: q.get("status") != Status.COMPLETED.value)

        return questions

    @staticmethod
    def facets(repo: Repository, user_id: str) -> dict:
        """Distinct languages and topics, for the list filters."""
        questions = repo.select(QUESTIONS, filters={"user_id": user_id})
        return {
            "languages": sorted({q["language"] for q in questions if q.get("language")}),
            "topics": sorted({q["topic"] for q in questions if q.get("topic")}),
        }

    @staticmethod
    def update(repo: Repository, user_id: str, question_id: str, data: dict) -> dict | None:
        existing = QuestionService.get(repo, user_id, question_id)
        if not existing:
            return None

        payload = {k: v for k, v in data.items() if k not in ("id", "user_id", "created_at", "last_solved_at")
                   and not (v is None and k in REQUIRED_FIELDS)}
        if (payload.get("status") == Status.COMPLETED.value
                and existing.get("status") != Status.COMPLETED.value):
            payload["last_solved_at"] = datetime.now(timezone.utc)
        if not payload:
            return existing

        rows = repo.update(QUESTIONS, {"id": question_id, "user_id": user_id}, payload)
        return rows[0] if rows else None

    @staticmethod
    def delete(repo: Repository, user_id: str, question_id: str) -> bool:
        """Delete a question; its solutions go with it."""
        if not QuestionService.get(repo, user_id, question_id):
            return False
        repo.delete(QUESTIONS, {"id": question_id, "user_id": user_id})
        return True

    @staticmethod
    def delete_all(repo: Repository, user_id: str) -> int:
        return repo.delete(QUESTIONS, {"user_id": user_id})
