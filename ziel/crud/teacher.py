import logging

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from ziel.crud.common import serialize, to_object_id, validate_document
from ziel.crud.fees import calculate_subject_fees
from ziel.errors import AuthenticationError, AuthorizationError, DuplicateError, NotFoundError
from ziel.models import Teacher, TeacherCreate, TeacherUpdate

logger = logging.getLogger(__name__)

LIST_FILTERS = ("teacherType", "role")


def not_found(id):
    return NotFoundError(f"Teacher not found with id of {id}")


async def teacher_insert(db, credentials, data: TeacherCreate, role: str = "teacher") -> dict:
    # early exit only, the unique index on email is what actually guards concurrent sign ups
    existing_teacher = await db.teachers.find_one({"email": data.email})
    if existing_teacher:
        raise DuplicateError("Teacher already exists with this email")

    subjects, _ = calculate_subject_fees(data.subjects)
    document = data.model_dump(exclude={"subjects"})
    document["subjects"] = subjects
    document["role"] = role
    document["password"] = credentials.get_password_hash(data.password)
    document = validate_document(Teacher, document)

    try:
        res = await db.teachers.insert_one(document)
    except DuplicateKeyError:
        raise DuplicateError("Teacher already exists with this email")
    document["_id"] = res.inserted_id
    logger.info("Registered teacher %s", res.inserted_id)
    return document


async def get_details(db, id) -> dict:
    object_id = to_object_id(id)
    details = await db.teachers.find_one({"_id": object_id}) if object_id else None
    if not details:
        raise not_found(id)
    return details


async def update_details(db, credentials, id, data: TeacherUpdate, user: dict) -> dict:
    existing = await get_details(db, id)

    # Make sure user is teacher owner or admin
    if user["role"] != "admin" and not (user["kind"] == "teacher" and user["id"] == str(existing["_id"])):
        raise AuthorizationError(f"User {user['id']} is not authorized to update this teacher", 401)

    patch = data.model_dump(exclude_unset=True)
    if "role" in patch and user["role"] != "admin":
        raise AuthorizationError("Only an admin can change a role")

    if patch.get("subjects") is not None:
        patch["subjects"], _ = calculate_subject_fees(patch["subjects"])

    if "password" in patch:
        password = patch.pop("password")
        if password and not credentials.verify_password(password, existing.get("password")):
            patch["password"] = credentials.get_password_hash(password)

    if not patch:
        return serialize(existing)

    merged = {key: value for key, value in existing.items() if key != "_id"}
    merged.update(patch)
    validated = validate_document(Teacher, merged)

    try:
        updated = await db.teachers.find_one_and_update(
            {"_id": existing["_id"]},
            {"$set": {key: validated[key] for key in patch}},
            projection={"password": 0},
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError:
        raise DuplicateError("Teacher already exists with this email")
    if not updated:
        raise not_found(id)
    return serialize(updated)


async def teacher_delete(db, id):
    details = await get_details(db, id)
    await db.teachers.delete_one({"_id": details["_id"]})
    logger.info("Deleted teacher %s", id)


async def authenticate(db, credentials, email: str, password: str) -> dict:
    teacher = await db.teachers.find_one({"email": email})
    if not teacher or not credentials.verify_password(password, teacher.get("password")):
        logger.warning("Failed teacher login")
        raise AuthenticationError("Invalid credentials")
    return teacher


async def ensure_admin(db, credentials, email: str, password: str):
    """Make sure the configured admin account exists and carries the admin role."""
    email = email.lower()
    teacher = await db.teachers.find_one({"email": email})
    if teacher:
        if teacher.get("role") != "admin":
            await db.teachers.update_one({"_id": teacher["_id"]}, {"$set": {"role": "admin"}})
            logger.info("Promoted %s to admin", teacher["_id"])
        return
    data = TeacherCreate(
        name="Administrator",
        email=email,
        password=password,
        contactNo="N/A",
        address="N/A",
        teacherType="full-time",
    )
    await teacher_insert(db, credentials, data, role="admin")
