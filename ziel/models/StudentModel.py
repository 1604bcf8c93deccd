from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from .CourseModel import MAX_INT64, Courses


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Mongo hands back naive UTC datetimes, keep everything comparable with them
    if value is not None and value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def lower_email(value):
    return value.lower() if isinstance(value, str) else value


class StudentCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    contactNo: str = Field(min_length=1)
    address: str = Field(min_length=1)
    className: str = Field(min_length=1)
    courses: Optional[Dict[str, Dict[str, Any]]] = None
    courseMode: Literal["online", "offline"] = "online"
    startDate: datetime
    endDate: datetime
    password: str = Field(min_length=6)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return lower_email(value)

    @field_validator("startDate", "endDate")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)

    @model_validator(mode="after")
    def check_dates(self):
        if self.endDate <= self.startDate:
            raise ValueError("End date must be after start date")
        return self


class StudentUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    contactNo: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = Field(default=None, min_length=1)
    className: Optional[str] = Field(default=None, min_length=1)
    courses: Optional[Dict[str, Dict[str, Any]]] = None
    courseMode: Optional[Literal["online", "offline"]] = None
    role: Optional[Literal["student", "admin"]] = None
    startDate: Optional[datetime] = None
    endDate: Optional[datetime] = None
    password: Optional[str] = Field(default=None, min_length=6)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return lower_email(value)

    @field_validator("startDate", "endDate")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)


class Student(BaseModel):
    """A student document as stored; used to re-validate merged updates."""
    name: str = Field(min_length=1)
    email: EmailStr
    contactNo: str = Field(min_length=1)
    address: str = Field(min_length=1)
    className: str = Field(min_length=1)
    courses: Courses = Field(default_factory=Courses)
    courseMode: Literal["online", "offline"] = "online"
    role: Literal["student", "admin"] = "student"
    startDate: datetime
    endDate: datetime
    totalAmount: int = Field(ge=0, le=MAX_INT64)
    password: str
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    @field_validator("startDate", "endDate", "createdAt")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)

    @model_validator(mode="after")
    def check_dates(self):
        if self.endDate <= self.startDate:
            raise ValueError("End date must be after start date")
        return self


class StudentLogin(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return lower_email(value)
