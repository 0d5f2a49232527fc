import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_engine.core.config import settings
from attendance_engine.core.security import decode_token
from attendance_engine.db.session import get_session
from attendance_engine.db.store import EnrollmentStore
from attendance_engine.services.identity import InstructorDirectory, Principal
from attendance_engine.services.ledger import AttendanceLedger
from attendance_engine.services.report import ReportAggregator
from attendance_engine.services.roster import RosterBuilder

logger = logging.getLogger(__name__)

# Missing credentials are reported by the ledger, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)


async def get_store(session: AsyncSession = Depends(get_session)) -> EnrollmentStore:
    return EnrollmentStore(session)


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Principal]:
    """
    Resolve the bearer token to the acting principal.
    Returns None when there is no usable access token.
    """
    if credentials is None:
        return None

    payload = decode_token(credentials.credentials)
    if payload is None:
        logger.warning("Rejected bearer token: invalid or expired")
        return None

    if payload.get("type") != "access":
        logger.warning("Rejected bearer token: not an access token")
        return None

    subject = payload.get("sub")
    if not subject:
        return None
    return Principal(user_id=str(subject))


async def get_roster_builder(store: EnrollmentStore = Depends(get_store)) -> RosterBuilder:
    return RosterBuilder(store)


async def get_report_aggregator(store: EnrollmentStore = Depends(get_store)) -> ReportAggregator:
    return ReportAggregator(store)


async def get_ledger(store: EnrollmentStore = Depends(get_store)) -> AttendanceLedger:
    return AttendanceLedger(
        store,
        InstructorDirectory(store),
        enforce_eligibility=settings.ENFORCE_ELIGIBILITY_ON_MARK,
    )
