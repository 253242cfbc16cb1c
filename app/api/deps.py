from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.student.student import StudentRepository


def get_student_repository(db: Session = Depends(get_db)) -> StudentRepository:
    """
    Dependency that builds a repository around the request's session.
    The session is closed by get_db once the request completes.
    """
    return StudentRepository(db)
