import pytest_asyncio

from tests.fakes import FakeApp, fast_settings


@pytest_asyncio.fixture
async def app():
    a = FakeApp()
    yield a
    a.state.scheduler.cancel_all()


@pytest_asyncio.fixture
async def fast_app():
    a = FakeApp(settings=fast_settings())
    yield a
    a.state.scheduler.cancel_all()
