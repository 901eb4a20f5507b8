import pytest

from shared.config import Settings


def test_defaults_are_local_sqlite():
    settings = Settings()
    assert settings.is_sqlite
    assert settings.json_logs is False


def test_prod_logs_json():
    settings = Settings(environment="prod", database_url="postgresql+asyncpg://u:secret@db/courses")
    assert settings.json_logs is True
    assert "secret" not in str(settings.safe_dict())


@pytest.mark.parametrize(
    "kwargs",
    [
        {"environment": "qa"},
        {"database_url": "mysql://db/courses"},
        {"database_pool_size": 0},
        {"log_level": "LOUD"},
        {"redis_url": "http://cache:6379"},
    ],
)
def test_invalid_settings_are_rejected(kwargs):
    with pytest.raises(ValueError):
        Settings(**kwargs)
