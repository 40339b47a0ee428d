from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Forfeiture policy (off by default; toggled by an admin)
    forfeiture_enabled: bool = False
    forfeiture_days_threshold: int = Field(60, ge=1)

    # At-risk urgency bands
    at_risk_critical_days: int = 7  # Days until forfeiture
    at_risk_high_days: int = 14  # Days until forfeiture
    at_risk_medium_overdue_days: int = 30  # Days overdue

    @property
    def forfeiture_threshold(self) -> int | None:
        """Threshold to hand to the engine, or None when forfeiture is disabled."""
        return self.forfeiture_days_threshold if self.forfeiture_enabled else None


settings = Settings()
