from typing import AsyncIterator
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from .config import settings
from .base import Base

engine = create_async_engine(settings.DATABASE_DSN, pool_pre_ping=True)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

def import_models():
    # mapped classes must be registered on Base.metadata before create_all
    from portal.modules.directory import models as _directory  # noqa: F401
    from portal.modules.availability import models as _availability  # noqa: F401
    from portal.modules.patients import models as _patients  # noqa: F401
    from portal.modules.appointments import models as _appointments  # noqa: F401

async def init_models():
    ## In dev-only "create_all" mode tables are created here; otherwise, migrations own the schema.
    if settings.DB_MANAGE == "create_all":
        import_models()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

async def get_session() -> AsyncIterator[AsyncSession]:
    async with SessionLocal() as session:
        yield session
