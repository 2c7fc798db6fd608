from sqlalchemy import Column, Integer, Time, Enum, ForeignKey
from db.database import Base
from tracker.enums import Weekday

class Schedule(Base):
    __tablename__ = "schedule"

    schedule_id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.course_id"), nullable=False, index=True)
    weekday = Column(Enum(Weekday, name="weekday", native_enum=False), nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
