from typing import Optional
from fastapi import Depends, Header, HTTPException, status

from auth.schemas import Requester
from tracker.config import MAX_ID


def get_requester_id(
    header_student_id: Optional[str] = Header(None, alias="student_id", convert_underscores=False),
) -> int:
    if header_student_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Missing Student ID header",
        )
    try:
        requester_id = int(header_student_id)
    except ValueError:
        requester_id = None
    if requester_id is None or abs(requester_id) > MAX_ID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Bad Request: Invalid Student ID format",
        )
    return requester_id


def get_requester(
    requester_id: int = Depends(get_requester_id),
    role: Optional[str] = Header(None),
) -> Requester:
    if role is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Missing role header",
        )
    return Requester(student_id=requester_id, role=role)


def ensure_owner(requester: Requester, owner_id: int) -> None:
    # ownership is strict: the role header grants no extra access
    if requester.student_id != owner_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Insufficient permissions",
        )
