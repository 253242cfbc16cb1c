from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Response, status

from app.api.deps import get_student_repository
from app.schemas.student import Student, StudentCreate, StudentSummary, StudentUpdate
from app.services.student.student import StudentRepository

router = APIRouter()

# Ids are stored as SQLite INTEGER (signed 64-bit)
STUDENT_ID = Path(ge=-2**63, le=2**63 - 1)


@router.get("", response_model=List[StudentSummary])
def get_students(
    name: Optional[str] = None,
    repo: StudentRepository = Depends(get_student_repository)
):
    """
    List all students

    - **name**: only return students with exactly this name (optional)
    """
    return repo.list_students(name)


@router.get("/{student_id}", response_model=StudentSummary)
def get_student(
    student_id: int = STUDENT_ID,
    repo: StudentRepository = Depends(get_student_repository)
):
    """
    Get a single student by ID
    """
    return repo.get_student(student_id)


@router.post("", response_model=Student, status_code=status.HTTP_201_CREATED)
def create_student(
    student: StudentCreate,
    repo: StudentRepository = Depends(get_student_repository)
):
    """
    Create a new student

    - **name**: student name (required, must be unique)
    - **grade**: echoed back in the response, not stored
    """
    return repo.create_student(student)


@router.put("/{student_id}", response_model=Student)
def update_student(
    student: StudentUpdate,
    student_id: int = STUDENT_ID,
    repo: StudentRepository = Depends(get_student_repository)
):
    """
    Update a student's name
    """
    return repo.update_student(student_id, student)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(
    student_id: int = STUDENT_ID,
    repo: StudentRepository = Depends(get_student_repository)
):
    """
    Delete a student
    """
    repo.delete_student(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
