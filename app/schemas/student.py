from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StudentBase(BaseModel):
    name: str = Field(min_length=1)
    # Declared range is 0-100, not enforced
    grade: int = 0

    @field_validator("grade", mode="before")
    @classmethod
    def null_grade_is_zero(cls, v):
        """A JSON null grade is read as 0."""
        return 0 if v is None else v


class StudentCreate(StudentBase):
    pass


class StudentUpdate(StudentBase):
    pass


class StudentSummary(BaseModel):
    """Row shape returned by list and get: only id and name are selected."""
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class Student(StudentBase):
    """Echo of a create/update request with the server-assigned id."""
    id: Optional[int] = None
