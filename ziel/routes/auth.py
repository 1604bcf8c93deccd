import logging
import time
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordBearer
from jose import ExpiredSignatureError, JOSEError, JWTError, jwt
from passlib.context import CryptContext

from ziel.crud import student as student_crud
from ziel.crud import teacher as teacher_crud
from ziel.crud.common import serialize
from ziel.db.database import Database
from ziel.errors import AuthenticationError, AuthorizationError, InternalError
from ziel.models import StudentLogin, TeacherCreate, TeacherLogin

logger = logging.getLogger(__name__)

router = APIRouter()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/auth/teachers/login", auto_error=False)


class CredentialService:
    """Password hashing and signed-token issuance."""

    def __init__(self, settings):
        self.settings = settings
        self.pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds
        )

    def verify_password(self, plain_password, hashed_password) -> bool:
        if not plain_password or not hashed_password:
            return False
        return self.pwd_context.verify(plain_password, hashed_password)

    def get_password_hash(self, password) -> str:
        return self.pwd_context.hash(password)

    def create_access_token(self, record_id: str, role: str, kind: str) -> str:
        expire = int(time.time()) + self.settings.jwt_expire_days * 24 * 60 * 60
        to_encode = {"id": str(record_id), "role": role, "kind": kind, "exp": expire}
        return jwt.encode(to_encode, self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm)

    def decode_access_token(self, token: str) -> dict:
        try:
            payload = jwt.decode(token, self.settings.jwt_secret, algorithms=[self.settings.jwt_algorithm])
        except ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except JWTError:
            raise AuthenticationError("Not authorized to access this route")
        if not payload.get("id") or payload.get("kind") not in ("student", "teacher"):
            raise AuthenticationError("Not authorized to access this route")
        return payload


def get_db(request: Request) -> Database:
    return request.app.state.database


def get_credentials(request: Request) -> CredentialService:
    return request.app.state.credentials


def token_response(request: Request, record: dict, status_code: int, include_data: bool = False):
    """Sign a token for ``record`` and send it both in the body and as an HTTP-only cookie."""
    settings = request.app.state.settings
    credentials = get_credentials(request)
    try:
        record_id = str(record["_id"])
        role = record.get("role") or record["kind"]
        token = credentials.create_access_token(record_id, role, record["kind"])
    except (KeyError, JOSEError) as e:
        logger.error("Error generating authentication token: %s", e)
        raise InternalError("Error generating authentication token")

    body = {"success": True, "token": token, "role": role, "id": record_id}
    if include_data:
        body["data"] = serialize({k: v for k, v in record.items() if k != "kind"})

    response = JSONResponse(status_code=status_code, content=jsonable_encoder(body))
    response.set_cookie(
        "token",
        token,
        max_age=settings.jwt_cookie_expire_days * 24 * 60 * 60,
        expires=settings.jwt_cookie_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.is_production,
    )
    return response


async def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Database = Depends(get_db),
    credentials: CredentialService = Depends(get_credentials),
) -> dict:
    if not token:
        token = request.cookies.get("token")
    if not token:
        raise AuthenticationError("Not authorized to access this route")

    payload = credentials.decode_access_token(token)
    try:
        object_id = ObjectId(payload["id"])
    except (InvalidId, TypeError):
        raise AuthenticationError("Not authorized to access this route")

    kind = payload["kind"]
    record = await db.collection(kind).find_one({"_id": object_id}, {"password": 0})
    if not record:
        raise AuthenticationError("Not authorized to access this route")

    # role comes from the stored record so a demotion takes effect immediately
    return {"id": str(record["_id"]), "role": record.get("role", kind), "kind": kind, "record": record}


def authorize(*roles):
    async def check_role(user: dict = Depends(get_current_user)) -> dict:
        if user["role"] not in roles:
            raise AuthorizationError(f"User role {user['role']} is not authorized to access this route")
        return user
    return check_role


@router.post("/teachers/register", status_code=201)
async def register_teacher(
    request: Request,
    data: TeacherCreate,
    db: Database = Depends(get_db),
    credentials: CredentialService = Depends(get_credentials),
):
    teacher = await teacher_crud.teacher_insert(db, credentials, data)
    return token_response(request, {**teacher, "kind": "teacher"}, 201)


@router.post("/teachers/login")
async def login_teacher(
    request: Request,
    data: TeacherLogin,
    db: Database = Depends(get_db),
    credentials: CredentialService = Depends(get_credentials),
):
    teacher = await teacher_crud.authenticate(db, credentials, data.email, data.password)
    return token_response(request, {**teacher, "kind": "teacher"}, 200)


@router.post("/students/login")
async def login_student(
    request: Request,
    data: StudentLogin,
    db: Database = Depends(get_db),
    credentials: CredentialService = Depends(get_credentials),
):
    student = await student_crud.authenticate(db, credentials, data.email, data.password)
    return token_response(request, {**student, "kind": "student"}, 200)


@router.get("/teachers/me")
async def read_teacher_me(user: dict = Depends(authorize("teacher", "admin"))):
    if user["kind"] != "teacher":
        raise AuthorizationError("Only teachers have a teacher profile")
    return {"success": True, "data": serialize(user["record"])}
