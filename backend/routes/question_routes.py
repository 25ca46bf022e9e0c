import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, field_validator
from typing import Optional

from auth import get_current_user
from models.enums import Difficulty, Status
from repository import Repository, get_repository
from services.question_service import QuestionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/questions", tags=["Questions"])


def _not_blank(v):
    if v is not None and not v.strip():
        raise ValueError("must not be blank")
    return v


class QuestionCreate(BaseModel):
    title: str
    description: str
    language: str
    topic: str
    difficulty: Difficulty
    status: Optional[Status] = Status.TODO
    solution_code: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("title", "description", "language", "topic")
    @classmethod
    def check_not_blank(cls, v):
        return _not_blank(v)


class QuestionUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = None
    topic: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    status: Optional[Status] = None
    solution_code: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("title", "description", "language", "topic")
    @classmethod
    def check_not_blank(cls, v):
        return _not_blank(v)


@router.get("")
async def list_questions(
    search: Optional[str] = None,
    difficulty: Optional[Difficulty] = None,
    status: Optional[Status] = None,
    language: Optional[str] = None,
    topic: Optional[str] = None,
    sort: str = Query("newest", pattern="^(newest|oldest|completed)$"),
    user_id: str = Depends(get_current_user),
    repo: Repository = Depends(get_repository),
):
    try:
        return QuestionService.search(
            repo, user_id,
            search=search,
            difficulty=difficulty.value if difficulty else None,
            status=status.value if status else None,
            language=language,
            topic=topic,
            sort=sort,
        )
    except Exception as e:
        logger.error(f"Failed to list questions: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", status_code=201)
async def create_question(question_data: QuestionCreate, user_id: str = Depends(get_current_user),
                          repo: Repository = Depends(get_repository)):
    try:
        data = question_data.model_dump(mode="json")
        result = QuestionService.create(repo, user_id, data)
        return {"status": "success", "data": result}
    except Exception as e:
        logger.error(f"Failed to create question: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/facets")
async def question_facets(user_id: str = Depends(get_current_user), repo: Repository = Depends(get_repository)):
    """Distinct languages and topics for the filter dropdowns."""
    try:
        return QuestionService.facets(repo, user_id)
    except Exception as e:
        logger.error(f"Failed to load facets: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{question_id}")
async def get_question(question_id: str, user_id: str = Depends(get_current_user),
                       repo: Repository = Depends(get_repository)):
    try:
        question = QuestionService.get(repo, user_id, question_id)
    except Exception as e:
        logger.error(f"Failed to load question {question_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    if not question:
        raise HTTPException(status_code=404, detail="Question not found")
    return question


@router.put("/{question_id}")
async def update_question(question_id: str, question_data: QuestionUpdate,
                          user_id: str = Depends(get_current_user), repo: Repository = Depends(get_repository)):
    try:
        data = question_data.model_dump(exclude_unset=True, mode="json")
        result = QuestionService.update(repo, user_id, question_id, data)
    except Exception as e:
        logger.error(f"Failed to update question {question_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Question not found")
    return {"status": "success", "data": result}


@router.delete("/{question_id}")
async def delete_question(question_id: str, user_id: str = Depends(get_current_user),
                          repo: Repository = Depends(get_repository)):
    try:
        deleted = QuestionService.delete(repo, user_id, question_id)
    except Exception as e:
        logger.error(f"Failed to delete question {question_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Question not found")
    return {"status": "success"}
