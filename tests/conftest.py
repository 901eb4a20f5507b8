import pytest

from app.container import build_container
from shared.config import Settings
from tests.helpers import TODAY, RecordingNotifier, seed_reference_data


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        environment="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'courses.db'}",
        auto_create_schema=True,
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
async def container(settings, notifier):
    container = build_container(settings, clock=lambda: TODAY, notifier=notifier)
    await container.start()
    await seed_reference_data(container.database)
    yield container
    await container.stop()
