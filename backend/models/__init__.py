# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.enums import Difficulty, Status
from models.question import Question
from models.solution import Solution
from models.profile import Profile

__all__ = [
    "Difficulty",
    "Status",
    "Question",
    "Solution",
    "Profile",
]
