from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import main
from db.database import Base
from db.models import assignments, courses, schedules, students  # noqa: F401  (register tables)
from auth.service import AuthService
from tracker.assignment_dao import AssignmentDao
from tracker.course_dao import CourseDao
from tracker.schedule_dao import ScheduleDao
from tracker.student_dao import StudentDao

PASSWORD = "secret123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@pytest.fixture
def student_dao(session_factory):
    return StudentDao(session_factory)


@pytest.fixture
def course_dao(session_factory):
    return CourseDao(session_factory)


@pytest.fixture
def assignment_dao(session_factory):
    return AssignmentDao(session_factory)


@pytest.fixture
def schedule_dao(session_factory):
    return ScheduleDao(session_factory)


@pytest.fixture
def auth_service(student_dao):
    return AuthService(student_dao)


@pytest.fixture
def student(student_dao):
    return student_dao.add_student("Katti Matikainen", "katti@example.org", PASSWORD)


@pytest.fixture
def other_student(student_dao):
    return student_dao.add_student("Matti Meikäläinen", "matti@example.org", PASSWORD)


@pytest.fixture
def course(course_dao, student):
    return course_dao.add_course(student.student_id, "Test101", date(2025, 1, 1), date(2025, 6, 1))


@pytest.fixture
def client(student_dao, course_dao, assignment_dao, schedule_dao):
    main.app.dependency_overrides[main.get_student_dao] = lambda: student_dao
    main.app.dependency_overrides[main.get_course_dao] = lambda: course_dao
    main.app.dependency_overrides[main.get_assignment_dao] = lambda: assignment_dao
    main.app.dependency_overrides[main.get_schedule_dao] = lambda: schedule_dao
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


@pytest.fixture
def headers_for():
    def make(student_id, role="user"):
        return {"student_id": str(student_id), "role": role}
    return make
