from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, ForeignKey
from db.database import Base
from tracker.enums import Status

class Assignment(Base):
    __tablename__ = "assignments"

    assignment_id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.student_id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.course_id"), nullable=True)  # no cascade
    title = Column(String(255), nullable=False)
    description = Column(Text)
    deadline = Column(DateTime, nullable=False)
    status = Column(
        Enum(
            Status,
            name="assignment_status",
            native_enum=False,
            values_callable=lambda enum: [s.value for s in enum],
        ),
        nullable=False,
        default=Status.PENDING,
    )
