import pytest

from condcss.config import CONCAT_LIMIT_ENV


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # переменные окружения разработчика не должны влиять на тесты
    monkeypatch.delenv(CONCAT_LIMIT_ENV, raising=False)
    monkeypatch.delenv("CONDCSS_DEBUG", raising=False)
