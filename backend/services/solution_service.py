"""
solution_service.py — Alternate solutions per question
Solutions are owned through their question, so every call checks the
question belongs to the caller first.
"""

from repository import Repository, QUESTIONS, SOLUTIONS


class SolutionService:
    @staticmethod
    def _owns_question(repo: Repository, user_id: str, question_id: str) -> bool:
        return repo.first(QUESTIONS, {"id": question_id, "user_id": user_id}) is not None

    @staticmethod
    def get_all(repo: Repository, user_id: str, question_id: str) -> list[dict] | None:
        """Newest first. None when the question is not the caller's."""
        if not SolutionService._owns_question(repo, user_id, question_id):
            return None
        return repo.select(SOLUTIONS, filters={"question_id": question_id}, order="created_at.desc")

    @staticmethod
    def create(repo: Repository, user_id: str, question_id: str, data: dict) -> dict | None:
        if not SolutionService._owns_question(repo, user_id, question_id):
            return None
        payload = dict(data)
        payload["question_id"] = question_id
        return repo.insert(SOLUTIONS, payload)

    @staticmethod
    def update(repo: Repository, user_id: str, question_id: str, solution_id: str, data: dict) -> dict | None:
        if not SolutionService._owns_question(repo, user_id, question_id):
            return None
        filters = {"id": solution_id, "question_id": question_id}
        existing = repo.first(SOLUTIONS, filters)
        if not existing:
            return None
        payload = {k: v for k, v in data.items() if k not in ("id", "question_id", "created_at")}
        if not payload:
            return existing
        rows = repo.update(SOLUTIONS, filters, payload)
        return rows[0] if rows else None

    @staticmethod
    def delete(repo: Repository, user_id: str, question_id: str, solution_id: str) -> bool:
        if not SolutionService._owns_question(repo, user_id, question_id):
            return False
        return repo.delete(SOLUTIONS, {"id": solution_id, "question_id": question_id}) > 0
