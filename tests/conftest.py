"""
Shared pytest fixtures: in-memory database, stubbed institutional API and an
ASGI client with the app's dependencies pointed at both.
"""
import os

# Must be set before portal.core.config is imported
os.environ["DATABASE_DSN"] = "sqlite+aiosqlite://"
os.environ["ENV"] = "local"
os.environ["UPSTREAM_BASE_URL"] = "https://upstream.test"

from datetime import time

import httpx
import pytest
import pytest_asyncio
import respx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from portal.core.base import Base
from portal.core.db import get_session, import_models
from portal.core.security import StudentSession
from portal.core.upstream import UpstreamClient, get_upstream

UPSTREAM = "https://upstream.test"

STUDENT_PROFILE = {
    "numero_control": "20030123",
    "persona": "ANA MARIA LOPEZ PEREZ",
    "email": "20030123@celaya.tecnm.mx",
    "semestre": 7,
    "promedio_ponderado": "88.456",
    "promedio_aritmetico": 87,
    "creditos_acumulados": "180",
    "porcentaje_avance": 72.5,
}


@pytest_asyncio.fixture
async def engine():
    import_models()
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def upstream():
    client = UpstreamClient(base_url=UPSTREAM, timeout=5.0)
    yield client
    await client.close()


@pytest.fixture
def upstream_api():
    with respx.mock(base_url=UPSTREAM, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def student_session():
    return StudentSession.from_token("opaque-token")


@pytest.fixture
def auth_cookie():
    return {"Cookie": "auth_token=opaque-token"}


@pytest_asyncio.fixture
async def client(session_factory, upstream):
    from portal.main import app

    async def _session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_upstream] = lambda: upstream
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://portal.test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def directory(db):
    """One room, two active psychologists and one inactive, with Monday windows for the first."""
    from portal.modules.availability.models import StaffSchedule
    from portal.modules.directory.models import ConsultationRoom, Staff

    room = ConsultationRoom(name="Cubículo 3", location="Edificio I")
    db.add(room)
    await db.flush()
    laura = Staff(first_name="Laura", last_name="Méndez", email="laura@celaya.tecnm.mx", consultation_room_id=room.id)
    carlos = Staff(first_name="Carlos", last_name="Ruiz", email="carlos@celaya.tecnm.mx")
    retired = Staff(first_name="Aaron", last_name="Soto", active=False)
    db.add_all([laura, carlos, retired])
    await db.flush()
    db.add_all([
        StaffSchedule(staff_id=laura.id, day_of_week=1, start_time=time(7, 0), end_time=time(9, 0)),
        StaffSchedule(staff_id=laura.id, day_of_week=1, start_time=time(12, 0), end_time=time(13, 0)),
        StaffSchedule(staff_id=laura.id, day_of_week=1, start_time=time(15, 0), end_time=time(17, 0), available=False),
        StaffSchedule(staff_id=laura.id, day_of_week=2, start_time=time(10, 0), end_time=time(11, 0)),
    ])
    await db.commit()
    return {"room": room, "laura": laura, "carlos": carlos, "retired": retired}
