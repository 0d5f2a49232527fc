import os
import sys
from pathlib import Path

# Ensure project root is on sys.path so `import attendance_engine` works during test collection
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Provide minimal env vars required by attendance_engine.core.config.Settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret")

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from attendance_engine.core.security import create_access_token
from attendance_engine.db import base  # registers every table
from attendance_engine.db.session import get_session
from attendance_engine.main import app
from attendance_engine.models.customer import Customer, Enrollment
from attendance_engine.models.enrollment import EnrollmentSession
from attendance_engine.models.instructor import Instructor

CLASS_SESSION_ID = 501


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def engine(tmp_path):
    # One database file per test; every session gets its own connection
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'attendance.db'}", echo=False, future=True)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def async_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    # override get_session to use the test database
    async def _get_session_override():
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_session] = _get_session_override
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_session, None)


@pytest.fixture
async def instructor(async_session):
    inst = Instructor(user_id="auth-user-1", name="Jo Coach")
    async_session.add(inst)
    await async_session.commit()
    await async_session.refresh(inst)
    return inst


@pytest.fixture
def auth_headers(instructor):
    token = create_access_token(subject=instructor.user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_enrollment_session(async_session):
    """Factory creating customer -> enrollment -> enrollment session rows."""
    async def _make(
        first_name: str,
        enrollment_type: str = "full",
        *,
        session_id: int = CLASS_SESSION_ID,
        trial_date: date = None,
        partial_dates: list = None,
        surname: str = "Swimmer",
    ) -> EnrollmentSession:
        customer = Customer(
            first_name=first_name,
            surname=surname,
            email=f"{first_name.lower()}@example.com",
            contact_no="0400 000 000",
        )
        async_session.add(customer)
        await async_session.flush()

        enrollment = Enrollment(customer_id=customer.id)
        async_session.add(enrollment)
        await async_session.flush()

        es = EnrollmentSession(
            enrollment_id=enrollment.id,
            session_id=session_id,
            enrollment_type=enrollment_type,
            trial_date=trial_date,
            partial_dates=partial_dates,
        )
        async_session.add(es)
        await async_session.commit()
        await async_session.refresh(es)
        return es

    return _make
