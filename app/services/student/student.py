import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    DuplicateNameError,
    StorageError,
    StudentNotFoundError,
)
from app.models.student import Student as StudentRow
from app.schemas.student import Student, StudentCreate, StudentSummary, StudentUpdate

logger = logging.getLogger(__name__)


class StudentRepository:
    """
    Sole owner of the SQL for the students table.

    Every method runs a single statement against the session it was built
    with and commits on success. Driver errors are rolled back and raised
    as StudentRepositoryError subclasses.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_students(self, name: Optional[str] = None) -> List[StudentSummary]:
        """All students, or those whose name equals `name` exactly."""
        query = select(StudentRow.id, StudentRow.name)
        if name:
            query = query.where(StudentRow.name == name)
        query = query.order_by(StudentRow.id)

        try:
            rows = self.db.execute(query).all()
        except SQLAlchemyError as e:
            self._fail("list students", e)
        return [StudentSummary(id=row.id, name=row.name) for row in rows]

    def get_student(self, student_id: int) -> StudentSummary:
        query = select(StudentRow.id, StudentRow.name).where(StudentRow.id == student_id)
        try:
            row = self.db.execute(query).first()
        except SQLAlchemyError as e:
            self._fail("get student", e)

        if row is None:
            logger.warning(f"Student {student_id} not found")
            raise StudentNotFoundError(student_id)
        return StudentSummary(id=row.id, name=row.name)

    def create_student(self, student: StudentCreate) -> Student:
        """
        Insert a new student and return it with the assigned id.

        Only the name is written; grade is echoed back untouched.
        """
        row = StudentRow(name=student.name)
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Duplicate student name: {student.name!r}")
            raise DuplicateNameError(student.name) from e
        except SQLAlchemyError as e:
            self._fail("create student", e)

        logger.info(f"Created student {row.id}")
        return Student(id=row.id, **student.model_dump())

    def update_student(self, student_id: int, student: StudentUpdate) -> Student:
        """Rename a student; grade is accepted but not persisted."""
        statement = (
            update(StudentRow)
            .where(StudentRow.id == student_id)
            .values(name=student.name)
        )
        try:
            result = self.db.execute(statement)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Duplicate student name: {student.name!r}")
            raise DuplicateNameError(student.name) from e
        except SQLAlchemyError as e:
            self._fail("update student", e)

        if result.rowcount == 0:
            logger.warning(f"Student {student_id} not found")
            raise StudentNotFoundError(student_id)

        logger.info(f"Updated student {student_id}")
        return Student(id=student_id, **student.model_dump())

    def delete_student(self, student_id: int) -> None:
        statement = delete(StudentRow).where(StudentRow.id == student_id)
        try:
            result = self.db.execute(statement)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("delete student", e)

        if result.rowcount == 0:
            logger.warning(f"Student {student_id} not found")
            raise StudentNotFoundError(student_id)

        logger.info(f"Deleted student {student_id}")

    def _fail(self, action: str, error: SQLAlchemyError):
        self.db.rollback()
        logger.error(f"Failed to {action}: {error}", exc_info=True)
        raise StorageError(f"failed to {action}") from error
