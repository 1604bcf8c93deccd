"""
Course fee aggregation.

Turns a course (student) or subject (teacher) selection map into its stored
shape plus the amount due. Pure and idempotent: running it over its own
output gives back the same output.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from ziel.models.CourseModel import SUBJECTS

logger = logging.getLogger(__name__)


def to_int(value, default: int = 0) -> int:
    """Lenient integer coercion: 100, "100", 100.9 and "100.9" all give 100."""
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def _drop_unknown(selection: Dict[str, Any]):
    unknown = sorted(set(selection) - set(SUBJECTS))
    if unknown:
        logger.warning("Ignoring unknown subjects in selection: %s", ", ".join(unknown))


def calculate_course_fees(courses: Optional[Dict[str, Any]]) -> Tuple[Dict[str, dict], int]:
    """Normalize a student's course map and return it with the total amount.

    A subject counts when it is selected and carries a fee. Its total is
    ``fee * classes`` with ``classes`` defaulting to 1. Anything else is
    reset to an empty entry. The map is a full replacement: subjects left
    out of ``courses`` come back zeroed.
    """
    courses = courses or {}
    _drop_unknown(courses)

    total_amount = 0
    updated_courses = {}
    for subject in SUBJECTS:
        course = courses.get(subject) or {}
        fee = course.get("fee")
        if course.get("selected") and fee is not None and fee != "":
            fee = to_int(fee)
            classes = to_int(course.get("classes")) or 1
            course_total = fee * classes
            updated_courses[subject] = {
                "selected": True,
                "fee": fee,
                "classes": classes,
                "total": course_total,
            }
            total_amount += course_total
        else:
            updated_courses[subject] = {"selected": False, "fee": 0, "classes": 0, "total": 0}

    return updated_courses, total_amount


def calculate_subject_fees(subjects: Optional[Dict[str, Any]]) -> Tuple[Dict[str, dict], int]:
    """Teacher counterpart of calculate_course_fees: no class count, the fee is the total."""
    subjects = subjects or {}
    _drop_unknown(subjects)

    total_amount = 0
    updated_subjects = {}
    for subject in SUBJECTS:
        entry = subjects.get(subject) or {}
        fee = entry.get("fee")
        if entry.get("selected") and fee is not None and fee != "":
            fee = to_int(fee)
            updated_subjects[subject] = {"selected": True, "fee": fee}
            total_amount += fee
        else:
            updated_subjects[subject] = {"selected": False, "fee": 0}

    return updated_subjects, total_amount
