"""
repository.py — table-level CRUD over either Supabase PostgREST or a local SQLAlchemy session.

Both stores speak the same small vocabulary: equality filters, PostgREST-style
ordering ("created_at.desc") and plain dict rows, so the services above them
do not care where the rows live.
"""

import logging
from abc import ABC, abstractmethod

from fastapi import Depends, Request
from fastapi.encoders import jsonable_encoder
from sqlalchemy import asc, desc
from sqlalchemy.orm import Session

from database import get_db
from models.question import Question
from models.solution import Solution
from models.profile import Profile
from supabase_client import is_supabase_configured
from supabase_rest import sb_select, sb_insert, sb_update, sb_delete

logger = logging.getLogger(__name__)

QUESTIONS = "coding_questions"
SOLUTIONS = "question_solutions"
PROFILES = "profiles"


class Repository(ABC):
    @abstractmethod
    def select(self, table: str, filters: dict = None, order: str = None) -> list[dict]:
        pass

    @abstractmethod
    def insert(self, table: str, data: dict) -> dict:
        pass

    @abstractmethod
    def update(self, table: str, filters: dict, data: dict) -> list[dict]:
        pass

    @abstractmethod
    def delete(self, table: str, filters: dict) -> int:
        pass

    def first(self, table: str, filters: dict) -> dict | None:
        rows = self.select(table, filters=filters)
        return rows[0] if rows else None


class RestRepository(Repository):
    """Rows live in Supabase; requests carry the caller's token so RLS applies."""

    def __init__(self, access_token: str = None):
        self.access_token = access_token

    def select(self, table, filters=None, order=None):
        return sb_select(table, filters=filters, order=order, access_token=self.access_token)

    def insert(self, table, data):
        return sb_insert(table, jsonable_encoder(data), access_token=self.access_token)

    def update(self, table, filters, data):
        return sb_update(table, filters, jsonable_encoder(data), access_token=self.access_token)

    def delete(self, table, filters):
        return sb_delete(table, filters, access_token=self.access_token)


class SqlRepository(Repository):
    """Rows live in the local SQLAlchemy database."""

    MODELS = {
        QUESTIONS: Question,
        SOLUTIONS: Solution,
        PROFILES: Profile,
    }

    def __init__(self, db: Session):
        self.db = db

    def _model(self, table: str):
        try:
            return self.MODELS[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}")

    @staticmethod
    def _to_dict(obj) -> dict:
        return {c.name: getattr(obj, c.name) for c in obj.__table__.columns}

    def _query(self, table: str, filters: dict = None):
        query = self.db.query(self._model(table))
        if filters:
            query = query.filter_by(**filters)
        return query

    def select(self, table, filters=None, order=None):
        model = self._model(table)
        query = self._query(table, filters)
        for part in (order or "").split(","):
            if not part:
                continue
            column, _, direction = part.partition(".")
            column_attr = getattr(model, column)
            query = query.order_by(desc(column_attr) if direction == "desc" else asc(column_attr))
        return [self._to_dict(obj) for obj in query.all()]

    def insert(self, table, data):
        try:
            obj = self._model(table)(**data)
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
            return self._to_dict(obj)
        except Exception:
            self.db.rollback()
            raise

    def update(self, table, filters, data):
        if not filters:
            raise ValueError("update requires at least one filter")
        try:
            objs = self._query(table, filters).all()
            for obj in objs:
                for k, v in data.items():
                    setattr(obj, k, v)
            self.db.commit()
            for obj in objs:
                self.db.refresh(obj)
            return [self._to_dict(obj) for obj in objs]
        except Exception:
            self.db.rollback()
            raise

    def delete(self, table, filters):
        if not filters:
            raise ValueError("delete requires at least one filter")
        try:
            # Delete through the session so ORM cascades (question -> solutions) run
            objs = self._query(table, filters).all()
            for obj in objs:
                self.db.delete(obj)
            self.db.commit()
            return len(objs)
        except Exception:
            self.db.rollback()
            raise


def get_repository(request: Request, db: Session = Depends(get_db)) -> Repository:
    """FastAPI dependency — Supabase when configured, the local database otherwise."""
    if is_supabase_configured():
        auth_header = request.headers.get("Authorization", "")
        token = auth_header.split(" ", 1)[1] if auth_header.startswith("Bearer ") else None
        return RestRepository(access_token=token)
    return SqlRepository(db)
