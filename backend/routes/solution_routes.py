import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator
from typing import Optional

from auth import get_current_user
from repository import Repository, get_repository
from services.solution_service import SolutionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/questions/{question_id}/solutions", tags=["Solutions"])


def _not_blank(v):
    if v is not None and not v.strip():
        raise ValueError("must not be blank")
    return v


class SolutionCreate(BaseModel):
    language: str
    solution_code: str
    notes: Optional[str] = None

    @field_validator("language", "solution_code")
    @classmethod
    def check_not_blank(cls, v):
        return _not_blank(v)


class SolutionUpdate(BaseModel):
    language: Optional[str] = None
    solution_code: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("language", "solution_code")
    @classmethod
    def check_not_blank(cls, v):
        return _not_blank(v)


@router.get("")
async def list_solutions(question_id: str, user_id: str = Depends(get_current_user),
                         repo: Repository = Depends(get_repository)):
    try:
        solutions = SolutionService.get_all(repo, user_id, question_id)
    except Exception as e:
        logger.error(f"Failed to list solutions for {question_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    if solutions is None:
        raise HTTPException(status_code=404, detail="Question not found")
    return solutions


@router.post("", status_code=201)
async def create_solution(question_id: str, solution_data: SolutionCreate,
                          user_id: str = Depends(get_current_user), repo: Repository = Depends(get_repository)):
    try:
        data = solution_data.model_dump()
        if not data.get("notes"):
            data["notes"] = None
        result = SolutionService.create(repo, user_id, question_id, data)
    except Exception as e:
        logger.error(f"Failed to add solution to {question_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Question not found")
    return {"status": "success", "data": result}


@router.put("/{solution_id}")
async def update_solution(question_id: str, solution_id: str, solution_data: SolutionUpdate,
                          user_id: str = Depends(get_current_user), repo: Repository = Depends(get_repository)):
    try:
        data = solution_data.model_dump(exclude_unset=True)
        result = SolutionService.update(repo, user_id, question_id, solution_id, data)
    except Exception as e:
        logger.error(f"Failed to update solution {solution_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Solution not found")
    return {"status": "success", "data": result}


@router.delete("/{solution_id}")
async def delete_solution(question_id: str, solution_id: str, user_id: str = Depends(get_current_user),
                          repo: Repository = Depends(get_repository)):
    try:
        deleted = SolutionService.delete(repo, user_id, question_id, solution_id)
    except Exception as e:
        logger.error(f"Failed to delete solution {solution_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Solution not found")
    return {"status": "success"}
