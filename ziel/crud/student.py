import logging

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from ziel.crud.common import serialize, to_object_id, validate_document
from ziel.crud.fees import calculate_course_fees
from ziel.errors import AuthenticationError, AuthorizationError, DuplicateError, NotFoundError, ValidationError
from ziel.models import SUBJECTS, Student, StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)

LIST_FILTERS = ("className", "courseMode", "role")


def not_found(id):
    return NotFoundError(f"Student not found with id of {id}")


async def student_insert(db, credentials, data: StudentCreate) -> dict:
    courses, total_amount = calculate_course_fees(data.courses)
    document = data.model_dump(exclude={"courses"})
    document["courses"] = courses
    document["totalAmount"] = total_amount
    document["password"] = credentials.get_password_hash(data.password)
    document = validate_document(Student, document)

    try:
        res = await db.students.insert_one(document)
    except DuplicateKeyError:
        raise DuplicateError("Student already exists with this email")
    document["_id"] = res.inserted_id
    logger.info("Registered student %s", res.inserted_id)
    return document


async def get_details(db, id) -> dict:
    object_id = to_object_id(id)
    details = await db.students.find_one({"_id": object_id}) if object_id else None
    if not details:
        raise not_found(id)
    return details


def check_owner_or_admin(user: dict, id, action: str):
    if user["role"] != "admin" and not (user["kind"] == "student" and user["id"] == str(id)):
        raise AuthorizationError(f"User {user['id']} is not authorized to {action} this student", 401)


async def update_details(db, credentials, id, data: StudentUpdate, user: dict) -> dict:
    check_owner_or_admin(user, id, "update")
    existing = await get_details(db, id)

    patch = data.model_dump(exclude_unset=True)
    if "role" in patch and user["role"] != "admin":
        raise AuthorizationError("Only an admin can change a role")

    # course totals are part of the same write as the rest of the patch
    if patch.get("courses") is not None:
        patch["courses"], patch["totalAmount"] = calculate_course_fees(patch["courses"])

    if "password" in patch:
        password = patch.pop("password")
        if password and not credentials.verify_password(password, existing.get("password")):
            patch["password"] = credentials.get_password_hash(password)

    if not patch:
        return serialize(existing)

    merged = {key: value for key, value in existing.items() if key != "_id"}
    merged.update(patch)
    validated = validate_document(Student, merged)

    try:
        updated = await db.students.find_one_and_update(
            {"_id": existing["_id"]},
            {"$set": {key: validated[key] for key in patch}},
            projection={"password": 0},
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError:
        raise DuplicateError("Student already exists with this email")
    if not updated:
        raise not_found(id)
    return serialize(updated)


async def student_delete(db, id):
    details = await get_details(db, id)
    await db.students.delete_one({"_id": details["_id"]})
    logger.info("Deleted student %s", id)


async def students_by_course(db, course: str) -> list:
    if course not in SUBJECTS:
        raise ValidationError(f"Unknown course {course}, expected one of {', '.join(SUBJECTS)}")
    cursor = db.students.find({f"courses.{course}.selected": True}, {"password": 0}).sort("createdAt", DESCENDING)
    return [serialize(doc) for doc in await cursor.to_list(length=None)]


async def authenticate(db, credentials, email: str, password: str) -> dict:
    student = await db.students.find_one({"email": email})
    if not student or not credentials.verify_password(password, student.get("password")):
        logger.warning("Failed student login")
        raise AuthenticationError("Invalid credentials")
    return student
