from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Request

from ziel.crud import student as crud
from ziel.crud.common import serialize
from ziel.crud.query import DEFAULT_LIMIT, advanced_results
from ziel.db.database import Database
from ziel.models import StudentCreate, StudentUpdate
from .auth import CredentialService, authorize, get_credentials, get_current_user, get_db, token_response

router = APIRouter()


@router.post("", status_code=201)
async def register_student(
    request: Request,
    data: StudentCreate,
    db: Database = Depends(get_db),
    credentials: CredentialService = Depends(get_credentials),
):
    student = await crud.student_insert(db, credentials, data)
    return token_response(request, {**student, "kind": "student"}, 201, include_data=True)


@router.get("")
async def get_students(
    select: Optional[str] = None,
    sort: Optional[str] = None,
    page: int = 1,
    limit: int = DEFAULT_LIMIT,
    className: Optional[str] = None,
    courseMode: Optional[Literal["online", "offline"]] = None,
    role: Optional[Literal["student", "admin"]] = None,
    db: Database = Depends(get_db),
    user: dict = Depends(authorize("admin")),
):
    filters = {"className": className, "courseMode": courseMode, "role": role}
    return await advanced_results(
        db.students, filters, crud.LIST_FILTERS, select=select, sort=sort, page=page, limit=limit
    )


@router.get("/course/{course}")
async def get_students_by_course(
    course: str,
    db: Database = Depends(get_db),
    user: dict = Depends(authorize("admin")),
):
    students = await crud.students_by_course(db, course)
    return {"success": True, "count": len(students), "data": students}


@router.get("/{id}")
async def get_student(id: str, db: Database = Depends(get_db), user: dict = Depends(get_current_user)):
    crud.check_owner_or_admin(user, id, "read")
    student = await crud.get_details(db, id)
    return {"success": True, "data": serialize(student)}


@router.put("/{id}")
async def update_student(
    id: str,
    data: StudentUpdate,
    db: Database = Depends(get_db),
    credentials: CredentialService = Depends(get_credentials),
    user: dict = Depends(get_current_user),
):
    student = await crud.update_details(db, credentials, id, data, user)
    return {"success": True, "data": student}


@router.delete("/{id}")
async def delete_student(id: str, db: Database = Depends(get_db), user: dict = Depends(authorize("admin"))):
    await crud.student_delete(db, id)
    return {"success": True, "data": {}}
