from typing import List, Optional, Union
import logging

from fastapi import FastAPI, HTTPException, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from auth.dependencies import get_requester, get_requester_id, ensure_owner
from auth.schemas import LoginSchema, Requester
from auth.service import AuthService

from db.database import Base, engine
from db.models.students import Student
from db.models.courses import Course
from db.models.assignments import Assignment
from db.models.schedules import Schedule

from tracker.assignment_dao import AssignmentDao
from tracker.config import HOST, MAX_ID, PORT
from tracker.course_dao import CourseDao
from tracker.dates import parse_date, parse_deadline, parse_time
from tracker.entities import AssignmentRecord, CourseRecord, ScheduleRecord, StudentRecord
from tracker.enums import Status, Weekday
from tracker.logging_config import setup_logging
from tracker.schedule_dao import ScheduleDao
from tracker.student_dao import StudentDao

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Study Tracker API",
    version="1.0.0",
    description=(
        "Students, courses, weekly schedules and assignments. "
        "The requester is identified by the student_id and role headers."
    ),
)

@app.on_event("startup")
def startup():
    setup_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready on %s", engine.url)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        detail = "Invalid JSON"
    else:
        fields = [str(e["loc"][-1]) for e in errors if e.get("loc")]
        detail = "Invalid " + ", ".join(dict.fromkeys(fields)) if fields else "Invalid request body"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


# ============ DAOs ============

def get_student_dao() -> StudentDao:
    return StudentDao()


def get_course_dao() -> CourseDao:
    return CourseDao()


def get_assignment_dao() -> AssignmentDao:
    return AssignmentDao()


def get_schedule_dao() -> ScheduleDao:
    return ScheduleDao()


def get_auth_service(student_dao: StudentDao = Depends(get_student_dao)) -> AuthService:
    return AuthService(student_dao)


# ============ Request parsing ============

INVALID_DATE = "Invalid date format. Use YYYY-MM-DD"
INVALID_TIME = "Invalid time format. Use HH:MM"


def bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def parse_path_id(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise bad_request("Bad Request: Invalid ID format")
    if abs(value) > MAX_ID:
        raise bad_request("Bad Request: Invalid ID format")
    return value


def parse_course_id(value: Union[int, str, None]) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise bad_request("Invalid course_id")
    try:
        course_id = int(str(value).strip())
    except ValueError:
        raise bad_request("Invalid course_id")
    if course_id <= 0 or course_id > MAX_ID:
        raise bad_request("Invalid course_id")
    return course_id


def parse_optional(value: Optional[str], parser, detail: str):
    if value is None:
        return None
    try:
        return parser(value)
    except ValueError:
        raise bad_request(detail)


# ============ Request models ============

class StudentCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class StudentUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class CourseCreate(BaseModel):
    course_name: Optional[str] = None
    start_date: Optional[str] = None  # YYYY-MM-DD
    end_date: Optional[str] = None


class CourseUpdate(CourseCreate):
    pass


class AssignmentCreate(BaseModel):
    course_id: Optional[Union[int, str]] = None
    title: Optional[str] = None
    description: Optional[str] = None
    deadline: Optional[str] = None  # YYYY-MM-DD or YYYY-MM-DD HH:MM:SS


class AssignmentUpdate(AssignmentCreate):
    status: Optional[str] = None  # pending / in-progress / completed / overdue


class ScheduleCreate(BaseModel):
    course_id: Optional[Union[int, str]] = None
    weekday: Optional[str] = None
    start_time: Optional[str] = None  # HH:MM
    end_time: Optional[str] = None


class ScheduleUpdate(BaseModel):
    weekday: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None


# ============ Login ============

@app.post("/login")
def login(data: LoginSchema, auth_service: AuthService = Depends(get_auth_service)):
    if not data.email or not data.password:
        raise bad_request("Email and password are required")

    student = auth_service.try_login(data.email, data.password)
    if not student:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    return {
        "studentId": student.student_id,
        "name": student.name,
        "email": student.email,
        "role": student.role,
    }


@app.api_route("/students/", methods=["GET", "PUT", "DELETE"])
@app.api_route("/courses/", methods=["GET", "PUT", "DELETE"])
@app.api_route("/assignments/", methods=["GET", "PUT", "DELETE"])
@app.api_route("/schedules/", methods=["GET", "PUT", "DELETE"])
def missing_id():
    raise bad_request("Bad Request: Missing ID in path")


# ============ Students ============

@app.get("/students/{student_id}", response_model=StudentRecord)
def get_student(
    student_id: str,
    requester: Requester = Depends(get_requester),
    student_dao: StudentDao = Depends(get_student_dao),
):
    sid = parse_path_id(student_id)
    ensure_owner(requester, sid)

    student = student_dao.get_student_by_id(sid)
    if not student:
        raise HTTPException(404, "Student not found")
    return student


@app.post("/students/", response_model=StudentRecord, status_code=201)
def create_student(data: StudentCreate, student_dao: StudentDao = Depends(get_student_dao)):
    if not data.name or not data.email or not data.password:
        raise bad_request("Name, email and password are required")

    if student_dao.get_student(data.email):
        raise HTTPException(409, "Email already in use")

    student = student_dao.add_student(data.name, data.email, data.password)
    if not student:
        raise bad_request("Failed to create student")
    return student


@app.put("/students/{student_id}", response_model=StudentRecord)
def update_student(
    student_id: str,
    data: StudentUpdate,
    requester: Requester = Depends(get_requester),
    student_dao: StudentDao = Depends(get_student_dao),
):
    sid = parse_path_id(student_id)
    ensure_owner(requester, sid)

    if data.name is None and data.email is None:
        raise bad_request("At least one of name or email must be provided")
    if data.name is not None and not data.name.strip():
        raise bad_request("Name cannot be empty")
    if data.email is not None and not data.email.strip():
        raise bad_request("Email cannot be empty")

    if data.email is not None:
        existing = student_dao.get_student(data.email)
        if existing and existing.student_id != sid:
            raise HTTPException(409, "Email already in use by another student")

    updated = False
    if data.name is not None:
        updated = student_dao.update_student_name(sid, data.name)
    if data.email is not None:
        updated = student_dao.update_student_email(sid, data.email) or updated

    if not updated:
        raise HTTPException(404, "Student not found or no changes made")
    return student_dao.get_student_by_id(sid)


@app.delete("/students/{student_id}")
def delete_student(
    student_id: str,
    requester: Requester = Depends(get_requester),
    student_dao: StudentDao = Depends(get_student_dao),
):
    sid = parse_path_id(student_id)
    ensure_owner(requester, sid)

    if not student_dao.delete_student(sid):
        raise HTTPException(404, "Student not found")
    return {"message": "Student deleted successfully"}


# ============ Courses ============

@app.get("/courses/students/{student_id}", response_model=List[CourseRecord])
def list_student_courses(
    student_id: str,
    requester: Requester = Depends(get_requester),
    course_dao: CourseDao = Depends(get_course_dao),
):
    sid = parse_path_id(student_id)
    ensure_owner(requester, sid)

    courses = course_dao.get_all_courses(sid)
    if not courses:
        raise HTTPException(404, "No courses found for this student")
    return courses


@app.get("/courses/{course_id}", response_model=CourseRecord)
def get_course(
    course_id: str,
    requester: Requester = Depends(get_requester),
    course_dao: CourseDao = Depends(get_course_dao),
):
    course = course_dao.get_course_by_id(parse_path_id(course_id))
    if not course:
        raise HTTPException(404, "Course not found")
    ensure_owner(requester, course.student_id)
    return course


@app.post("/courses/", response_model=CourseRecord, status_code=201)
def create_course(
    data: CourseCreate,
    requester_id: int = Depends(get_requester_id),
    course_dao: CourseDao = Depends(get_course_dao),
):
    start_date = parse_optional(data.start_date, parse_date, INVALID_DATE)
    end_date = parse_optional(data.end_date, parse_date, INVALID_DATE)

    if not data.course_name or start_date is None or end_date is None:
        raise bad_request("Course name, start date, and end date are required")

    course = course_dao.add_course(requester_id, data.course_name, start_date, end_date)
    if not course:
        raise bad_request("Failed to add course")
    return course


@app.put("/courses/{course_id}", response_model=CourseRecord)
def update_course(
    course_id: str,
    data: CourseUpdate,
    requester: Requester = Depends(get_requester),
    course_dao: CourseDao = Depends(get_course_dao),
):
    cid = parse_path_id(course_id)
    existing = course_dao.get_course_by_id(cid)
    if not existing:
        raise HTTPException(404, "Course not found")
    ensure_owner(requester, existing.student_id)

    start_date = parse_optional(data.start_date, parse_date, INVALID_DATE)
    end_date = parse_optional(data.end_date, parse_date, INVALID_DATE)

    if not course_dao.update_course(cid, data.course_name, start_date, end_date):
        raise bad_request("Failed to update course")
    return course_dao.get_course_by_id(cid)


@app.delete("/courses/{course_id}")
def delete_course(
    course_id: str,
    requester: Requester = Depends(get_requester),
    course_dao: CourseDao = Depends(get_course_dao),
):
    cid = parse_path_id(course_id)
    course = course_dao.get_course_by_id(cid)
    if not course:
        raise HTTPException(404, "Course not found")
    ensure_owner(requester, course.student_id)

    if not course_dao.delete_course(cid):
        raise HTTPException(500, "Failed to delete course")
    return {"message": "Course deleted successfully"}


# ============ Assignments ============

@app.get("/assignments/students/{student_id}", response_model=List[AssignmentRecord])
def list_student_assignments(
    student_id: str,
    requester: Requester = Depends(get_requester),
    assignment_dao: AssignmentDao = Depends(get_assignment_dao),
):
    sid = parse_path_id(student_id)
    ensure_owner(requester, sid)

    assignments = assignment_dao.get_assignments(sid)
    if not assignments:
        raise HTTPException(404, "No assignments found")
    return assignments


@app.get("/assignments/{assignment_id}", response_model=AssignmentRecord)
def get_assignment(
    assignment_id: str,
    requester: Requester = Depends(get_requester),
    assignment_dao: AssignmentDao = Depends(get_assignment_dao),
):
    assignment = assignment_dao.get_assignment_by_id(parse_path_id(assignment_id))
    if not assignment:
        raise HTTPException(404, "Assignment not found")
    ensure_owner(requester, assignment.student_id)
    return assignment


def ensure_course_owner(requester_id: int, course_id: Optional[int], course_dao: CourseDao) -> None:
    # an unknown course is left for the DAO to reject
    if course_id is None:
        return
    course = course_dao.get_course_by_id(course_id)
    if course and course.student_id != requester_id:
        raise HTTPException(403, "Forbidden: Insufficient permissions")


@app.post("/assignments/", response_model=AssignmentRecord, status_code=201)
def create_assignment(
    data: AssignmentCreate,
    requester_id: int = Depends(get_requester_id),
    assignment_dao: AssignmentDao = Depends(get_assignment_dao),
    course_dao: CourseDao = Depends(get_course_dao),
):
    deadline = parse_optional(data.deadline, parse_deadline, INVALID_DATE)
    course_id = parse_course_id(data.course_id)

    if not data.title or deadline is None:
        raise bad_request("Title, and deadline are required")
    ensure_course_owner(requester_id, course_id, course_dao)

    assignment = assignment_dao.insert_assignment(
        requester_id, course_id, data.title, data.description, deadline
    )
    if not assignment:
        raise bad_request("Failed to create assignment")
    return assignment


@app.put("/assignments/{assignment_id}", response_model=AssignmentRecord)
def update_assignment(
    assignment_id: str,
    data: AssignmentUpdate,
    requester: Requester = Depends(get_requester),
    assignment_dao: AssignmentDao = Depends(get_assignment_dao),
    course_dao: CourseDao = Depends(get_course_dao),
):
    aid = parse_path_id(assignment_id)
    existing = assignment_dao.get_assignment_by_id(aid)
    if not existing:
        raise HTTPException(404, "Assignment not found")
    ensure_owner(requester, existing.student_id)

    # validate everything before touching the row
    changes = {}
    if data.status is not None:
        try:
            changes["status"] = Status.from_db_value(data.status)
        except ValueError:
            raise bad_request("Invalid status")

    fields = data.model_fields_set
    if "title" in fields and data.title is not None:
        changes["title"] = data.title
    if "description" in fields:
        changes["description"] = data.description
    if "deadline" in fields and data.deadline is not None:
        changes["deadline"] = parse_optional(data.deadline, parse_deadline, INVALID_DATE)
    if "course_id" in fields:
        # an explicit null detaches the assignment from its course
        changes["course_id"] = parse_course_id(data.course_id)
        ensure_course_owner(requester.student_id, changes["course_id"], course_dao)

    if not changes:
        raise bad_request("No fields were updated")

    if not assignment_dao.update_assignment(aid, **changes):
        raise bad_request("Failed to update assignment")

    return assignment_dao.get_assignment_by_id(aid)


@app.delete("/assignments/{assignment_id}")
def delete_assignment(
    assignment_id: str,
    requester: Requester = Depends(get_requester),
    assignment_dao: AssignmentDao = Depends(get_assignment_dao),
):
    aid = parse_path_id(assignment_id)
    assignment = assignment_dao.get_assignment_by_id(aid)
    if not assignment:
        raise HTTPException(404, "Assignment not found")
    ensure_owner(requester, assignment.student_id)

    if not assignment_dao.delete_assignment(aid):
        raise HTTPException(500, "Failed to delete assignment")
    return {"message": "Assignment deleted successfully"}


# ============ Schedules ============

def course_owner(course_id: int, course_dao: CourseDao) -> int:
    course = course_dao.get_course_by_id(course_id)
    if not course:
        raise HTTPException(404, "Course not found")
    return course.student_id


def parse_weekday(value: Optional[str]) -> Optional[Weekday]:
    if value is None:
        return None
    try:
        return Weekday.from_string(value)
    except ValueError:
        raise bad_request("Invalid weekday value")


@app.get("/schedules/courses/{course_id}", response_model=List[ScheduleRecord])
def list_course_schedules(
    course_id: str,
    requester: Requester = Depends(get_requester),
    schedule_dao: ScheduleDao = Depends(get_schedule_dao),
    course_dao: CourseDao = Depends(get_course_dao),
):
    cid = parse_path_id(course_id)
    ensure_owner(requester, course_owner(cid, course_dao))

    schedules = schedule_dao.get_all_schedules_for_course(cid)
    if not schedules:
        raise HTTPException(404, "No schedules found for this course")
    return schedules


@app.get("/schedules/students/{student_id}", response_model=List[ScheduleRecord])
def list_student_schedules(
    student_id: str,
    requester: Requester = Depends(get_requester),
    schedule_dao: ScheduleDao = Depends(get_schedule_dao),
):
    sid = parse_path_id(student_id)
    ensure_owner(requester, sid)

    schedules = schedule_dao.get_all_schedules_for_student(sid)
    if not schedules:
        raise HTTPException(404, "No schedules found for this student")
    return schedules


@app.get("/schedules/{schedule_id}", response_model=ScheduleRecord)
def get_schedule(
    schedule_id: str,
    requester: Requester = Depends(get_requester),
    schedule_dao: ScheduleDao = Depends(get_schedule_dao),
    course_dao: CourseDao = Depends(get_course_dao),
):
    schedule = schedule_dao.get_schedule(parse_path_id(schedule_id))
    if not schedule:
        raise HTTPException(404, "Schedule not found")
    ensure_owner(requester, course_owner(schedule.course_id, course_dao))
    return schedule


@app.post("/schedules/", response_model=ScheduleRecord, status_code=201)
def create_schedule(
    data: ScheduleCreate,
    requester: Requester = Depends(get_requester),
    schedule_dao: ScheduleDao = Depends(get_schedule_dao),
    course_dao: CourseDao = Depends(get_course_dao),
):
    if data.course_id is None:
        raise bad_request("course_id is required")
    course_id = parse_course_id(data.course_id)
    weekday = parse_weekday(data.weekday)

    if weekday is None or data.start_time is None or data.end_time is None:
        raise bad_request("course_id, weekday, start_time, and end_time are required")

    start = parse_optional(data.start_time, parse_time, INVALID_TIME)
    end = parse_optional(data.end_time, parse_time, INVALID_TIME)
    if start >= end:
        raise bad_request("start_time must be before end_time")

    ensure_owner(requester, course_owner(course_id, course_dao))

    schedule = schedule_dao.insert_schedule(course_id, weekday, start, end)
    if not schedule:
        raise bad_request("Failed to add schedule")
    return schedule


@app.put("/schedules/{schedule_id}", response_model=ScheduleRecord)
def update_schedule(
    schedule_id: str,
    data: ScheduleUpdate,
    requester: Requester = Depends(get_requester),
    schedule_dao: ScheduleDao = Depends(get_schedule_dao),
    course_dao: CourseDao = Depends(get_course_dao),
):
    sid = parse_path_id(schedule_id)
    existing = schedule_dao.get_schedule(sid)
    if not existing:
        raise HTTPException(404, "Schedule not found")
    ensure_owner(requester, course_owner(existing.course_id, course_dao))

    weekday = parse_weekday(data.weekday) or existing.weekday
    start = parse_optional(data.start_time, parse_time, INVALID_TIME) or existing.start_time
    end = parse_optional(data.end_time, parse_time, INVALID_TIME) or existing.end_time
    if start >= end:
        raise bad_request("start_time must be before end_time")

    if not schedule_dao.update_schedule(sid, existing.course_id, weekday, start, end):
        raise HTTPException(500, "Failed to update schedule")
    return schedule_dao.get_schedule(sid)


@app.delete("/schedules/{schedule_id}")
def delete_schedule(
    schedule_id: str,
    requester: Requester = Depends(get_requester),
    schedule_dao: ScheduleDao = Depends(get_schedule_dao),
    course_dao: CourseDao = Depends(get_course_dao),
):
    sid = parse_path_id(schedule_id)
    schedule = schedule_dao.get_schedule(sid)
    if not schedule:
        raise HTTPException(404, "Schedule not found")
    ensure_owner(requester, course_owner(schedule.course_id, course_dao))

    if not schedule_dao.delete_schedule(sid):
        raise HTTPException(500, "Failed to delete schedule")
    return {"message": "Schedule deleted successfully"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
