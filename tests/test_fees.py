from ziel.crud.fees import calculate_course_fees, calculate_subject_fees, to_int

EMPTY = {"selected": False, "fee": 0, "classes": 0, "total": 0}


def test_selected_course_is_fee_times_classes():
    courses, total = calculate_course_fees({
        "physics": {"selected": True, "fee": 100, "classes": 3},
        "chemistry": {"selected": False},
    })
    assert total == 300
    assert courses["physics"] == {"selected": True, "fee": 100, "classes": 3, "total": 300}
    assert courses["chemistry"] == EMPTY


def test_missing_subjects_come_back_zeroed():
    courses, total = calculate_course_fees({"math": {"selected": True, "fee": 50, "classes": 2}})
    assert total == 100
    assert set(courses) == {"physics", "chemistry", "math", "biology", "computerScience"}
    for subject in ("physics", "chemistry", "biology", "computerScience"):
        assert courses[subject] == EMPTY


def test_classes_default_to_one():
    courses, total = calculate_course_fees({
        "physics": {"selected": True, "fee": 120},
        "biology": {"selected": True, "fee": 80, "classes": "lots"},
    })
    assert courses["physics"]["classes"] == 1
    assert courses["biology"]["classes"] == 1
    assert total == 200


def test_fee_strings_are_coerced():
    courses, total = calculate_course_fees({
        "physics": {"selected": True, "fee": "150", "classes": "2"},
        "chemistry": {"selected": True, "fee": "abc", "classes": 4},
    })
    assert courses["physics"]["total"] == 300
    assert courses["chemistry"] == {"selected": True, "fee": 0, "classes": 4, "total": 0}
    assert total == 300


def test_zero_fee_keeps_selected_flag():
    courses, total = calculate_course_fees({"math": {"selected": True, "fee": 0, "classes": 2}})
    assert courses["math"]["selected"] is True
    assert courses["math"]["total"] == 0
    assert total == 0


def test_unselected_entry_is_reset():
    courses, _ = calculate_course_fees({"physics": {"selected": False, "fee": 900, "classes": 9, "total": 8100}})
    assert courses["physics"] == EMPTY


def test_selected_without_fee_is_reset():
    courses, total = calculate_course_fees({"physics": {"selected": True, "classes": 3}})
    assert courses["physics"] == EMPTY
    assert total == 0


def test_negative_fee_is_not_rejected_here():
    courses, total = calculate_course_fees({"physics": {"selected": True, "fee": -10, "classes": 2}})
    assert courses["physics"]["total"] == -20
    assert total == -20


def test_unknown_subjects_are_dropped(caplog):
    courses, total = calculate_course_fees({"history": {"selected": True, "fee": 10}})
    assert "history" not in courses
    assert total == 0
    assert "history" in caplog.text


def test_aggregation_is_idempotent():
    first, first_total = calculate_course_fees({
        "physics": {"selected": True, "fee": "100", "classes": 3},
        "math": {"selected": True, "fee": 0},
        "biology": {"selected": False, "fee": 40},
    })
    second, second_total = calculate_course_fees(first)
    assert second == first
    assert second_total == first_total


def test_empty_selection():
    courses, total = calculate_course_fees(None)
    assert total == 0
    assert all(entry == EMPTY for entry in courses.values())


def test_teacher_subjects_sum_fees_without_classes():
    subjects, total = calculate_subject_fees({
        "math": {"selected": True, "fee": "500"},
        "physics": {"selected": True, "fee": 300, "classes": 4},
        "biology": {"selected": False, "fee": 200},
    })
    assert total == 800
    assert subjects["math"] == {"selected": True, "fee": 500}
    assert subjects["physics"] == {"selected": True, "fee": 300}
    assert subjects["biology"] == {"selected": False, "fee": 0}
    assert calculate_subject_fees(subjects) == (subjects, total)


def test_to_int():
    assert to_int("42") == 42
    assert to_int(42.9) == 42
    assert to_int("42.9") == 42
    assert to_int(None) == 0
    assert to_int("x", default=1) == 1
    assert to_int(True) == 0


def test_non_finite_fee_counts_as_zero():
    courses, total = calculate_course_fees({
        "physics": {"selected": True, "fee": float("inf"), "classes": 2},
        "math": {"selected": True, "fee": "nan", "classes": 2},
    })
    assert courses["physics"]["fee"] == 0
    assert courses["math"]["fee"] == 0
    assert total == 0
    assert to_int(float("-inf")) == 0
    assert to_int("inf") == 0
