from fastapi import APIRouter
from . import auth, student, teacher

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Auth"])
router.include_router(student.router, prefix="/students", tags=["Student"])
router.include_router(teacher.router, prefix="/teachers", tags=["Teacher"])
