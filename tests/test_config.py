import pytest
from pydantic import ValidationError

from src.config import Settings


class TestSettings:
    def test_forfeiture_off_by_default(self, monkeypatch):
        monkeypatch.delenv("FORFEITURE_ENABLED", raising=False)
        settings = Settings(_env_file=None)
        assert not settings.forfeiture_enabled
        assert settings.forfeiture_days_threshold == 60
        assert settings.forfeiture_threshold is None

    def test_enabled_threshold(self):
        settings = Settings(forfeiture_enabled=True, forfeiture_days_threshold=45)
        assert settings.forfeiture_threshold == 45

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FORFEITURE_ENABLED", "true")
        monkeypatch.setenv("FORFEITURE_DAYS_THRESHOLD", "90")
        settings = Settings(_env_file=None)
        assert settings.forfeiture_threshold == 90

    def test_threshold_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(forfeiture_days_threshold=0)
