from datetime import date, time

import pytest

from tracker.enums import Weekday


def test_add_and_delete_course(course_dao, student):
    course = course_dao.add_course(student.student_id, "Test101", date(2025, 1, 1), date(2025, 6, 1))

    assert course.course_id > 0
    assert course.course_name == "Test101"
    assert course.start_date == date(2025, 1, 1)
    assert course.end_date == date(2025, 6, 1)

    assert course_dao.delete_course(course.course_id)
    assert not course_dao.delete_course(-100)


def test_end_before_start_is_rejected(course_dao, student):
    assert course_dao.add_course(student.student_id, "Backwards", date(2025, 6, 1), date(2025, 1, 1)) is None


def test_single_day_course_is_allowed(course_dao, student):
    assert course_dao.add_course(student.student_id, "Workshop", date(2025, 3, 3), date(2025, 3, 3)) is not None


@pytest.mark.parametrize("name", ["", None])
def test_empty_name_is_rejected(course_dao, student, name):
    assert course_dao.add_course(student.student_id, name, date(2025, 1, 1), date(2025, 2, 1)) is None


def test_unknown_student_is_rejected(course_dao):
    assert course_dao.add_course(9999, "Orphan", date(2025, 1, 1), date(2025, 2, 1)) is None


def test_get_course(course_dao, course):
    assert course_dao.get_course_by_id(course.course_id) == course
    assert course_dao.get_course_by_id(9999) is None


def test_get_all_courses(course_dao, student, other_student, course):
    second = course_dao.add_course(student.student_id, "Test102", date(2025, 2, 1), date(2025, 5, 1))
    course_dao.add_course(other_student.student_id, "Not mine", date(2025, 2, 1), date(2025, 5, 1))

    courses = course_dao.get_all_courses(student.student_id)
    assert [c.course_id for c in courses] == [course.course_id, second.course_id]
    assert course_dao.get_all_courses(9999) == []


def test_partial_update_keeps_other_fields(course_dao, course):
    assert course_dao.update_course(course.course_id, course_name="Renamed")

    updated = course_dao.get_course_by_id(course.course_id)
    assert updated.course_name == "Renamed"
    assert updated.start_date == course.start_date
    assert updated.end_date == course.end_date


def test_update_with_nothing_succeeds_unchanged(course_dao, course):
    assert course_dao.update_course(course.course_id)
    assert course_dao.update_course(course.course_id, course_name="")
    assert course_dao.get_course_by_id(course.course_id) == course


def test_update_checks_resolved_dates(course_dao, course):
    # new end date before the stored start date
    assert not course_dao.update_course(course.course_id, end_date=date(2024, 12, 31))
    assert course_dao.get_course_by_id(course.course_id).end_date == date(2025, 6, 1)


def test_update_unknown_course(course_dao):
    assert not course_dao.update_course(9999, course_name="Ghost")


def test_delete_course_removes_its_schedules(course_dao, schedule_dao, course):
    schedule = schedule_dao.insert_schedule(course.course_id, Weekday.FRIDAY, time(12, 0), time(14, 0))

    assert course_dao.delete_course(course.course_id)
    assert schedule_dao.get_schedule(schedule.schedule_id) is None


def test_out_of_range_ids_fail_quietly(course_dao, student):
    huge = 2 ** 70
    assert course_dao.update_course(huge, "x") is False
    assert course_dao.get_course_by_id(huge) is None
    assert course_dao.add_course(huge, "x", date(2025, 1, 1), date(2025, 2, 1)) is None
    assert course_dao.get_all_courses(huge) == []
    assert course_dao.delete_course(huge) is False
