from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .CourseModel import Subjects
from .StudentModel import lower_email, to_naive_utc


class TeacherCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    contactNo: str = Field(min_length=1)
    address: str = Field(min_length=1)
    teacherType: Literal["full-time", "part-time"]
    subjects: Optional[Dict[str, Dict[str, Any]]] = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return lower_email(value)


class TeacherUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    contactNo: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = Field(default=None, min_length=1)
    teacherType: Optional[Literal["full-time", "part-time"]] = None
    subjects: Optional[Dict[str, Dict[str, Any]]] = None
    role: Optional[Literal["teacher", "admin"]] = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return lower_email(value)


class Teacher(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    contactNo: str = Field(min_length=1)
    address: str = Field(min_length=1)
    teacherType: Literal["full-time", "part-time"]
    subjects: Subjects = Field(default_factory=Subjects)
    password: str
    role: Literal["teacher", "admin"] = "teacher"
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    @field_validator("createdAt")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)


class TeacherLogin(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return lower_email(value)
