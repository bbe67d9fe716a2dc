import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from blogapi.config import Settings
from blogapi.main import create_app
from blogapi.models import init_models

TEST_SECRET = 'test-secret'


def make_settings(tmp_path, **overrides):
    values = dict(
        jwt_secret=TEST_SECRET,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        upload_dir=str(tmp_path / 'uploads'),
        frontend_urls=['http://frontend.test'],
        log_level='WARNING',
    )
    values.update(overrides)
    return Settings(**values)


async def _build(settings):
    app = create_app(settings)
    await init_models(app.state.engine)
    return app


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest_asyncio.fixture
async def app(settings):
    app = await _build(settings)
    yield app
    await app.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as ac:
        yield ac


@pytest_asyncio.fixture
async def cookie_client(tmp_path):
    app = await _build(make_settings(tmp_path, token_transport='cookie'))
    async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as ac:
        yield ac
    await app.state.engine.dispose()
