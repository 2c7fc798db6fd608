from typing import Optional
from pydantic import BaseModel

class LoginSchema(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class Requester(BaseModel):
    student_id: int
    role: str  # user / admin
