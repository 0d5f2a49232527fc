from dataclasses import dataclass
from typing import Optional

from attendance_engine.core.exceptions import AuthorizationError
from attendance_engine.db.store import EnrollmentStore
from attendance_engine.models.instructor import Instructor


@dataclass(frozen=True)
class Principal:
    """An authenticated caller, identified by the identity provider's user id."""
    user_id: str


class InstructorDirectory:
    """Resolves authenticated principals to instructor records."""

    def __init__(self, store: EnrollmentStore):
        self._store = store

    async def resolve(self, principal: Optional[Principal]) -> Instructor:
        if principal is None:
            raise AuthorizationError("Not authenticated")
        instructor = await self._store.instructor_for_user(principal.user_id)
        if instructor is None:
            raise AuthorizationError(f"No instructor for user {principal.user_id}")
        return instructor
