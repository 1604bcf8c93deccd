from enum import Enum
from pydantic import BaseModel, Field

MAX_INT64 = 2**63 - 1


class Subject(str, Enum):
    physics = "physics"
    chemistry = "chemistry"
    math = "math"
    biology = "biology"
    computerScience = "computerScience"


SUBJECTS = [subject.value for subject in Subject]


class CourseEntry(BaseModel):
    selected: bool = False
    fee: int = Field(default=0, ge=0, le=MAX_INT64)
    classes: int = Field(default=0, ge=0, le=MAX_INT64)
    total: int = Field(default=0, ge=0, le=MAX_INT64)


class SubjectEntry(BaseModel):
    selected: bool = False
    fee: int = Field(default=0, ge=0, le=MAX_INT64)


class Courses(BaseModel):
    physics: CourseEntry = Field(default_factory=CourseEntry)
    chemistry: CourseEntry = Field(default_factory=CourseEntry)
    math: CourseEntry = Field(default_factory=CourseEntry)
    biology: CourseEntry = Field(default_factory=CourseEntry)
    computerScience: CourseEntry = Field(default_factory=CourseEntry)


class Subjects(BaseModel):
    physics: SubjectEntry = Field(default_factory=SubjectEntry)
    chemistry: SubjectEntry = Field(default_factory=SubjectEntry)
    math: SubjectEntry = Field(default_factory=SubjectEntry)
    biology: SubjectEntry = Field(default_factory=SubjectEntry)
    computerScience: SubjectEntry = Field(default_factory=SubjectEntry)
