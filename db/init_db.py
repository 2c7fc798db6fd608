# python -m db.init_db

from db.database import Base, engine
from db.models.students import Student
from db.models.courses import Course
from db.models.assignments import Assignment
from db.models.schedules import Schedule

print("Creating tables...")
Base.metadata.create_all(bind=engine)
print("Done")
