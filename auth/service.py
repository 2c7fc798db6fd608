import logging
from typing import Optional

from auth.security import verify_password as _verify_hash
from tracker.entities import StudentRecord
from tracker.student_dao import StudentDao

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, student_dao: StudentDao):
        self.dao = student_dao

    def try_login(self, email: str, password: str) -> Optional[StudentRecord]:
        """Return the student when the password matches the stored hash."""
        stored_hash = self.dao.get_password_hash(email)
        if stored_hash is not None and self.verify_password(password, stored_hash):
            return self.dao.get_student(email)
        logger.info("Failed login for %s", email)
        return None

    def verify_password(self, password: str, hashed: str) -> bool:
        try:
            return _verify_hash(password, hashed)
        except (ValueError, TypeError):
            # unrecognised or malformed hash
            return False
