from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError as PydanticValidationError

from ziel.errors import ValidationError, format_validation_errors


def serialize(doc: Optional[dict]) -> Optional[dict]:
    """Make a Mongo document JSON friendly and strip the password hash."""
    if doc is None:
        return None
    doc = dict(doc)
    doc.pop("password", None)
    for key, value in doc.items():
        if isinstance(value, ObjectId):
            doc[key] = str(value)
    if "_id" in doc:
        doc["id"] = doc["_id"]
    return doc


def to_object_id(record_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError):
        return None


def validate_document(model, document: dict) -> dict:
    """Run the stored-document model over ``document`` and return the coerced fields."""
    try:
        return model(**document).model_dump()
    except PydanticValidationError as e:
        raise ValidationError(format_validation_errors(e.errors()))
