from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def make_engine(database_url: str):
    return create_async_engine(database_url, future=True, echo=False)


def make_sessionmaker(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_models(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session(request: Request):
    async with request.app.state.sessionmaker() as session:
        yield session


# Import models to register tables
from .users import User  # noqa: F401,E402
from .likes import post_likes_table  # noqa: F401,E402
from .posts import Post  # noqa: F401,E402
