from sqlalchemy import Column, Integer, String, Date, ForeignKey
from db.database import Base

class Course(Base):
    __tablename__ = "courses"

    course_id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.student_id"), nullable=False, index=True)
    course_name = Column(String(150), nullable=False)
    start_date = Column(Date)
    end_date = Column(Date)
