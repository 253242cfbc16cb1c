from sqlalchemy import Column, Integer, Text
from app.core.database import Base


class Student(Base):
    __tablename__ = "students"
    # AUTOINCREMENT keeps ids monotonic, deleted ids are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(Text, unique=True, nullable=False)
    # Present in the table but never read or written by the service
    age = Column(Integer)
    grade = Column(Text)
