from typing import Literal, Optional

from fastapi import APIRouter, Depends

from ziel.crud import teacher as crud
from ziel.crud.common import serialize
from ziel.crud.query import DEFAULT_LIMIT, advanced_results
from ziel.db.database import Database
from ziel.models import TeacherUpdate
from .auth import CredentialService, authorize, get_credentials, get_current_user, get_db, read_teacher_me

router = APIRouter()

router.add_api_route("/me", read_teacher_me, methods=["GET"])


@router.put("/{id}")
async def update_teacher(
    id: str,
    data: TeacherUpdate,
    db: Database = Depends(get_db),
    credentials: CredentialService = Depends(get_credentials),
    user: dict = Depends(get_current_user),
):
    teacher = await crud.update_details(db, credentials, id, data, user)
    return {"success": True, "data": teacher}


# Admin routes
@router.get("")
async def get_teachers(
    select: Optional[str] = None,
    sort: Optional[str] = None,
    page: int = 1,
    limit: int = DEFAULT_LIMIT,
    teacherType: Optional[Literal["full-time", "part-time"]] = None,
    role: Optional[Literal["teacher", "admin"]] = None,
    db: Database = Depends(get_db),
    user: dict = Depends(authorize("admin")),
):
    filters = {"teacherType": teacherType, "role": role}
    return await advanced_results(
        db.teachers, filters, crud.LIST_FILTERS, select=select, sort=sort, page=page, limit=limit
    )


@router.get("/{id}")
async def get_teacher(id: str, db: Database = Depends(get_db), user: dict = Depends(authorize("admin"))):
    teacher = await crud.get_details(db, id)
    return {"success": True, "data": serialize(teacher)}


@router.delete("/{id}")
async def delete_teacher(id: str, db: Database = Depends(get_db), user: dict = Depends(authorize("admin"))):
    await crud.teacher_delete(db, id)
    return {"success": True, "data": {}}
