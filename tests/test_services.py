from datetime import datetime

import pytest

from tracker.enums import Status
from tracker.services import AssignmentsModifier, DataFetcher, INVALID_ID


@pytest.fixture
def modifier(assignment_dao):
    return AssignmentsModifier(assignment_dao)


@pytest.fixture
def fetcher(assignment_dao, course_dao):
    return DataFetcher(assignment_dao, course_dao)


def test_add_assignment_returns_new_id(modifier, fetcher, student, course):
    assignment_id = modifier.add_assignment(student.student_id, course.course_id, "Lab", "Lab 1", "2025-10-01")

    assert assignment_id > 0
    (assignment,) = fetcher.fetch_user_assignments(student.student_id)
    assert assignment.assignment_id == assignment_id
    assert assignment.deadline == datetime(2025, 10, 1)


def test_add_assignment_accepts_full_timestamp(modifier, fetcher, student):
    assignment_id = modifier.add_assignment(student.student_id, None, "Lab", None, "2025-10-01 08:15:00")

    (assignment,) = fetcher.fetch_user_assignments(student.student_id)
    assert assignment.assignment_id == assignment_id
    assert assignment.deadline == datetime(2025, 10, 1, 8, 15)


@pytest.mark.parametrize("deadline", ["2024-31-12", "tomorrow", "", None])
def test_add_assignment_with_bad_deadline(modifier, student, deadline):
    assert modifier.add_assignment(student.student_id, None, "Lab", None, deadline) == INVALID_ID


def test_add_assignment_with_missing_title(modifier, student):
    assert modifier.add_assignment(student.student_id, None, None, "desc", "2025-12-12") == INVALID_ID


def test_remove_and_change_status(modifier, fetcher, student):
    assignment_id = modifier.add_assignment(student.student_id, None, "Lab", None, "2025-10-01")

    assert modifier.change_assignment_status(assignment_id, Status.COMPLETED)
    assert fetcher.fetch_user_assignments(student.student_id)[0].status == Status.COMPLETED

    assert modifier.remove_assignment(assignment_id)
    assert fetcher.fetch_user_assignments(student.student_id) == []
    assert not modifier.remove_assignment(assignment_id)


def test_fetch_courses(fetcher, student, course):
    assert fetcher.fetch_course(course.course_id) == course
    assert fetcher.fetch_course(9999) is None
    assert fetcher.fetch_user_courses(student.student_id) == [course]
